from dotenv import load_dotenv

load_dotenv()

import os
from pathlib import Path

from dependency_injector import containers, providers

from chefmaster.constants import AIConfig, ImageConfig, PricingConfig, SessionConfig
from chefmaster.export.pdf import PdfExporter
from chefmaster.export.service import ExportService
from chefmaster.gemini_client import create_genai_client
from chefmaster.image.generator import ImageGenerator
from chefmaster.session.service import SessionService
from chefmaster.session.store import InMemorySessionStore
from chefmaster.sheet.generator import SheetGenerator

PROMPT_DIR = Path(__file__).parent / "sheet" / "prompt"


class Container(containers.DeclarativeContainer):
    """의존성 주입 컨테이너"""

    wiring_config = containers.WiringConfiguration(
        packages=[
            "chefmaster.session",
        ]
    )
    config = providers.Configuration()
    config.gemini.api_key.from_env(
        "GEMINI_API_KEY",
        default=os.getenv("API_KEY") or os.getenv("GOOGLE_API_KEY"),
    )
    config.gemini.text_model.from_env("GEMINI_TEXT_MODEL", default=AIConfig.TEXT_MODEL)
    config.gemini.image_model.from_env("GEMINI_IMAGE_MODEL", default=AIConfig.IMAGE_MODEL)

    config.pricing.market.from_env("SHEET_MARKET", default=PricingConfig.MARKET)
    config.pricing.currency.from_env("SHEET_CURRENCY", default=PricingConfig.CURRENCY)
    config.pricing.markup.from_env("SHEET_MARKUP", default=PricingConfig.MARKUP, as_=float)
    config.pricing.yield_portions.from_env("SHEET_YIELD_PORTIONS", default=PricingConfig.YIELD_PORTIONS, as_=int)
    config.pricing.price_rounding.from_env("SHEET_PRICE_ROUNDING", default=PricingConfig.PRICE_ROUNDING, as_=int)

    config.image.fallback_url.from_env("SHEET_FALLBACK_IMAGE_URL", default=ImageConfig.FALLBACK_URL)
    config.session.ttl_seconds.from_env("SESSION_TTL_SECONDS", default=SessionConfig.TTL_SECONDS, as_=int)

    # Gemini
    genai_client = providers.Singleton(
        create_genai_client,
        api_key=config.gemini.api_key,
    )

    # Sheet
    sheet_generator = providers.Singleton(
        SheetGenerator,
        client=genai_client,
        model=config.gemini.text_model,
        system_prompt_path=PROMPT_DIR / "system.md",
        user_prompt_path=PROMPT_DIR / "user.md",
        response_schema_path=PROMPT_DIR / "technical_sheet.json",
        market=config.pricing.market,
        currency=config.pricing.currency,
        markup=config.pricing.markup,
        yield_portions=config.pricing.yield_portions,
        price_rounding=config.pricing.price_rounding,
    )

    # Image
    image_generator = providers.Singleton(
        ImageGenerator,
        client=genai_client,
        model=config.gemini.image_model,
    )

    # Session
    session_store = providers.Singleton(
        InMemorySessionStore,
        ttl_seconds=config.session.ttl_seconds,
    )
    session_service = providers.Factory(
        SessionService,
        store=session_store,
        sheet_generator=sheet_generator,
        image_generator=image_generator,
        fallback_image_url=config.image.fallback_url,
        currency=config.pricing.currency,
        markup=config.pricing.markup,
        price_rounding=config.pricing.price_rounding,
    )

    # Export
    pdf_exporter = providers.Singleton(PdfExporter)
    export_service = providers.Factory(
        ExportService,
        exporter=pdf_exporter,
        currency=config.pricing.currency,
    )


# 전역 컨테이너 인스턴스
container = Container()
