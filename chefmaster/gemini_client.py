import logging
from typing import Optional

from google import genai

logger = logging.getLogger(__name__)


def create_genai_client(api_key: Optional[str]) -> Optional[genai.Client]:
    """
    Gemini 클라이언트를 생성한다.

    API 키가 없으면 None을 반환하고, 생성 요청 시점에 인증 오류로 처리된다.
    """
    if not api_key:
        logger.warning("GEMINI_API_KEY가 설정되지 않았습니다. 생성 요청은 인증 오류로 처리됩니다.")
        return None
    return genai.Client(api_key=api_key)
