"""
언어 처리 유틸리티 함수들
"""

import logging
from typing import Optional

from chefmaster.constants import LANGUAGE_MAPPING

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "es"


def normalize_language_code(language: Optional[str]) -> str:
    """
    언어 코드를 지원되는 2글자 ISO-639-1 형식으로 정규화

    Args:
        language: 입력 언어 코드 (예: 'es-CO', 'english', 'EN')

    Returns:
        'es' 또는 'en'
    """
    if not language:
        return DEFAULT_LANGUAGE

    language_clean = language.lower().strip().replace('_', '-')
    normalized = LANGUAGE_MAPPING.get(language_clean, language_clean)

    # 하이픈이 있는 경우 첫 부분만 사용 (예: en-AU -> en)
    if '-' in normalized:
        normalized = normalized.split('-')[0]

    if normalized in get_supported_languages():
        return normalized

    logger.warning(f"지원하지 않는 언어 코드: {language}, 기본값 '{DEFAULT_LANGUAGE}' 사용")
    return DEFAULT_LANGUAGE


def get_supported_languages() -> list[str]:
    """
    지원되는 언어 코드 목록 반환
    """
    return sorted(set(LANGUAGE_MAPPING.values()))
