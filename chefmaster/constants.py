"""
애플리케이션 전역 상수 정의
"""


class AIConfig:
    """Gemini 모델 관련 설정"""
    TEXT_MODEL = "gemini-3-flash-preview"
    IMAGE_MODEL = "gemini-2.5-flash-image"
    THINKING_BUDGET = 0


class PricingConfig:
    """원가 계산 규칙 (모델에게 지시하는 값)"""
    MARKET = "Colombia"
    CURRENCY = "COP"
    MARKUP = 3.3  # 식재료 원가율 30%
    YIELD_PORTIONS = 4
    PRICE_ROUNDING = 100


class ImageConfig:
    """요리 이미지 생성 관련 설정"""
    STYLE_PREFIX = (
        "Fotografía gastronómica profesional de alta gama, luz natural de estudio, "
        "emplatado minimalista y elegante sobre vajilla artesanal"
    )
    ASPECT_RATIO = "1:1"
    DEFAULT_MIME_TYPE = "image/png"
    FALLBACK_URL = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=800&auto=format"


class ExportConfig:
    """PDF 내보내기 설정"""
    FILENAME_PREFIX = "Ficha_"
    MARGIN_MM = 10
    IMAGE_MAX_MM = 60
    IMAGE_FETCH_TIMEOUT = 10.0


class SessionConfig:
    """세션 저장소 설정"""
    TTL_SECONDS = 1800


# 언어 코드 매핑 (지원 언어: es, en)
LANGUAGE_MAPPING = {
    # 스페인어
    'spanish': 'es',
    'español': 'es',
    'espanol': 'es',
    'es-co': 'es',
    'es-es': 'es',
    'es-mx': 'es',

    # 영어
    'english': 'en',
    'inglés': 'en',
    'ingles': 'en',
    'en-us': 'en',
    'en-gb': 'en',
}


class ErrorMessages:
    """사용자 노출용 에러 메시지 (언어별)"""
    CONFIGURATION = {
        "es": "No fue posible autenticar con el proveedor de IA. Vuelve a conectar tus credenciales e intenta de nuevo.",
        "en": "The AI provider rejected the credentials. Reconnect your API key and try again.",
    }
    GENERIC = {
        "es": "Error al procesar la solicitud. Por favor, verifica tu conexión o intenta con otro plato.",
        "en": "The request could not be processed. Check your connection or try another dish.",
    }
