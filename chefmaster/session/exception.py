from chefmaster.exception import ChefMasterException, ErrorCode


class SessionErrorCode(ErrorCode):
    SESSION_BUSY = ("SESSION_001", "이전 요청이 아직 처리 중입니다.")


class SessionException(ChefMasterException):
    def __init__(self, code: SessionErrorCode):
        super().__init__(code, status_code=409)
        self.code = code
