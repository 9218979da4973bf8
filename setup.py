"""
Routemap - Build Script

시간표 기반 최소 도착 시각 경로 탐색 패키지 (routemap) 와 번들 샘플 시간표
"""

from setuptools import setup, find_packages


setup(
    name='routemap',
    version='1.2.0',
    author='Routemap Team',
    description='Time-dependent earliest-arrival routing over subway timetables',
    long_description='''
    Earliest-arrival routing engine for subway networks described by real
    departure timetables (same-station transfers with a fixed penalty,
    loop lines, terminal stations), with a FastAPI service on top.
    ''',
    packages=find_packages(include=['routemap', 'routemap.*']),
    package_data={'routemap': ['data/*.json']},
    include_package_data=True,
    install_requires=[
        'fastapi>=0.100.0,<0.137',
        'uvicorn>=0.23.0',
        'pydantic>=2.0',
        'python-dotenv>=1.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-mock>=3.10',
            'httpx>=0.24',
        ],
    },
    zip_safe=False,
    python_requires='>=3.10',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
    ],
)
