"""
유틸리티 함수들 패키지
"""

from .language import (
    get_supported_languages,
    normalize_language_code,
)

__all__ = [
    'normalize_language_code',
    'get_supported_languages'
]
