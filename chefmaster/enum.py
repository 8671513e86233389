from enum import Enum
from typing import Optional

from chefmaster.utils.language import normalize_language_code


class LanguageType(str, Enum):
    ES = "es"
    EN = "en"

    @property
    def prompt_name(self) -> str:
        return "Español" if self is LanguageType.ES else "English"

    @classmethod
    def from_code(cls, code: Optional[str]) -> "LanguageType":
        return cls(normalize_language_code(code))
