from chefmaster.exception import ChefMasterException, ErrorCode


class ImageErrorCode(ErrorCode):
    NO_IMAGE_DATA = ("IMAGE_001", "응답에 이미지 데이터가 없습니다.")
    IMAGE_GENERATE_FAILED = ("IMAGE_002", "이미지 생성 중 오류가 발생했습니다.")


class ImageException(ChefMasterException):
    def __init__(self, code: ImageErrorCode):
        super().__init__(code, status_code=502)
        self.code = code
