from chefmaster.exception import ChefMasterException, ErrorCode


class ExportErrorCode(ErrorCode):
    EXPORT_FAILED = ("EXPORT_001", "PDF 내보내기 중 오류가 발생했습니다.")


class ExportException(ChefMasterException):
    def __init__(self, code: ExportErrorCode):
        super().__init__(code, status_code=500)
        self.code = code
