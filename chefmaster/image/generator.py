import base64
import logging
from typing import Optional

from google import genai
from google.genai import types

from chefmaster.constants import ImageConfig
from chefmaster.image.exception import ImageErrorCode, ImageException


class ImageGenerator:
    def __init__(
        self,
        *,
        client: Optional[genai.Client],
        model: str,
        style_prefix: str = ImageConfig.STYLE_PREFIX,
        aspect_ratio: str = ImageConfig.ASPECT_RATIO,
    ):
        self.logger = logging.getLogger(__name__)
        self.client = client
        self.model = model
        self.style_prefix = style_prefix

        self.image_conf = types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
        )

    def build_prompt(self, prompt: str) -> str:
        return f"{self.style_prefix}: {prompt.strip()}"

    def generate(self, prompt: str) -> str:
        """프롬프트로 정사각형 요리 이미지를 한 장 생성해 data URI로 반환한다."""
        if self.client is None:
            raise ImageException(ImageErrorCode.IMAGE_GENERATE_FAILED)

        try:
            response = self.client.models.generate_content(
                model=self.model,
                contents=self.build_prompt(prompt),
                config=self.image_conf,
            )
        except Exception as e:
            self.logger.warning(f"이미지 생성 API 호출 실패: {e}")
            raise ImageException(ImageErrorCode.IMAGE_GENERATE_FAILED) from e

        blob = self._find_inline_data(response)
        if blob is None:
            self.logger.warning("이미지 생성 응답에 inline_data가 없습니다.")
            raise ImageException(ImageErrorCode.NO_IMAGE_DATA)

        data = blob.data
        encoded = base64.b64encode(data).decode("ascii") if isinstance(data, (bytes, bytearray)) else str(data)
        mime_type = blob.mime_type or ImageConfig.DEFAULT_MIME_TYPE
        return f"data:{mime_type};base64,{encoded}"

    @staticmethod
    def _find_inline_data(response) -> Optional[types.Blob]:
        for cand in getattr(response, "candidates", None) or []:
            content = getattr(cand, "content", None)
            if not content:
                continue
            for part in getattr(content, "parts", None) or []:
                blob = getattr(part, "inline_data", None)
                if blob is not None and blob.data:
                    return blob
        return None
