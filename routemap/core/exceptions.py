# custom exception 정의 및 관리


class RoutemapException(Exception):  # 예외 구조 정의
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# 입력 계약 위반 => 호출자에게 그대로 전파
class InvalidTimeError(RoutemapException, ValueError):
    def __init__(self, message: str = "유효하지 않은 시각입니다"):
        super().__init__(message, code="INVALID_TIME")


class StationNotFoundException(RoutemapException):
    def __init__(self, message: str = "역을 찾을 수 없습니다"):
        super().__init__(message, code="STATION_NOT_FOUND")


class TimetableLoadException(RoutemapException):
    def __init__(self, message: str = "시간표 데이터를 불러올 수 없습니다"):
        super().__init__(message, code="TIMETABLE_LOAD_ERROR")
