# custom exception 정의 및 관리


class RoutingException(Exception):  # 예외 구조 정의
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class RouteNotFoundException(RoutingException):
    def __init__(self, message: str = "경로를 찾을 수 없습니다"):
        super().__init__(message, code="ROUTE_NOT_FOUND")


class InvalidRouteQueryException(RoutingException):
    def __init__(self, message: str = "유효하지 않은 경로 탐색 요청입니다"):
        super().__init__(message, code="INVALID_ROUTE_QUERY")


class SearchCancelledException(RoutingException):
    def __init__(self, message: str = "경로 탐색이 중단되었습니다"):
        super().__init__(message, code="SEARCH_CANCELLED")


# Edge Source 조회 실패 => 재시도 없이 전파, 경로 없음으로 바꾸지 않음
class EdgeSourceException(RoutingException):
    def __init__(self, message: str = "구간 조회에 실패했습니다"):
        super().__init__(message, code="EDGE_SOURCE_ERROR")


class DepartureNotFoundException(RoutingException):
    def __init__(self, message: str = "departure를 찾을 수 없습니다"):
        super().__init__(message, code="DEPARTURE_NOT_FOUND")


class InvalidDepartureIdException(RoutingException):
    def __init__(self, message: str = "유효하지 않은 departure id입니다"):
        super().__init__(message, code="INVALID_DEPARTURE_ID")
