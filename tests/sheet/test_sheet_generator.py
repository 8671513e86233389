import json
from unittest.mock import MagicMock

import pytest
from google.genai import errors as genai_errors

from chefmaster.enum import LanguageType
from chefmaster.sheet.exception import SheetErrorCode, SheetException
from chefmaster.sheet.schema import IngredientCategory, TechnicalSheet
from tests.conftest import make_text_response


def test_generate_parses_valid_sheet(text_client, make_sheet_generator):
    """스키마에 맞는 응답이면 TechnicalSheet로 변환되어야 한다."""
    # When
    sheet = make_sheet_generator(text_client).generate("Ceviche")

    # Then
    assert isinstance(sheet, TechnicalSheet)
    assert sheet.dish_name == "Ceviche"
    assert sheet.ingredients
    assert sheet.ingredients[0].category is IngredientCategory.FISH
    assert sheet.financials.total_cost == sum(i.subtotal for i in sheet.ingredients)
    assert sheet.preparation_steps[1].temp is None
    assert sheet.image_url is None


def test_generate_sends_schema_constrained_request(text_client, make_sheet_generator):
    """JSON 스키마와 시스템 지시문을 포함해 한 번만 호출해야 한다."""
    # When
    make_sheet_generator(text_client).generate("  Ceviche  ")

    # Then
    text_client.models.generate_content.assert_called_once()
    kwargs = text_client.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert kwargs["contents"] == 'Genera una ficha técnica profesional y detallada para el plato: "Ceviche"'
    config = kwargs["config"]
    assert config.response_mime_type == "application/json"
    assert config.thinking_config.thinking_budget == 0


def test_system_instruction_encodes_business_rules(make_sheet_generator):
    """시장/통화/배수/반올림/분류/언어 규칙이 지시문에 들어가야 한다."""
    generator = make_sheet_generator(MagicMock())

    # When
    instruction = generator.build_system_instruction(LanguageType.EN)

    # Then
    assert "Colombia" in instruction
    assert "COP" in instruction
    assert "3.3" in instruction
    assert "30%" in instruction
    assert "100 COP" in instruction
    assert "'pescado'" in instruction and "'otros'" in instruction
    assert "Idioma: English" in instruction
    assert "{{" not in instruction


def test_response_schema_declares_category_enum(make_sheet_generator):
    schema = make_sheet_generator(MagicMock()).response_schema
    category = schema["properties"]["ingredients"]["items"]["properties"]["category"]

    assert category["enum"] == [c.value for c in IngredientCategory]
    assert "imagePrompt" in schema["required"]
    assert "imageUrl" not in schema["properties"]


@pytest.mark.parametrize("text", [None, "", "   "])
def test_empty_response_fails(text, make_sheet_generator):
    """빈 응답이면 EMPTY_RESPONSE 예외가 발생해야 한다."""
    client = MagicMock()
    client.models.generate_content.return_value = MagicMock(text=text)

    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(client).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.EMPTY_RESPONSE


def test_non_json_response_fails_with_invalid_schema(make_sheet_generator):
    client = MagicMock()
    client.models.generate_content.return_value = make_text_response("Aquí tienes la ficha: {")

    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(client).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.INVALID_SCHEMA


def test_unknown_field_is_rejected(ceviche_payload, make_sheet_generator):
    """정의되지 않은 필드가 있으면 거부해야 한다."""
    ceviche_payload["chefNotes"] = "extra"
    client = MagicMock()
    client.models.generate_content.return_value = make_text_response(json.dumps(ceviche_payload))

    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(client).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.INVALID_SCHEMA


@pytest.mark.parametrize("mutate", [
    lambda p: p.pop("financials"),
    lambda p: p["financials"].pop("costPerPortion"),
    lambda p: p.update(ingredients=[]),
    lambda p: p["ingredients"][0].update(category="marisco"),
])
def test_missing_or_invalid_required_fields_are_rejected(mutate, ceviche_payload, make_sheet_generator):
    mutate(ceviche_payload)
    client = MagicMock()
    client.models.generate_content.return_value = make_text_response(json.dumps(ceviche_payload))

    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(client).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.INVALID_SCHEMA


def test_missing_conservation_details_default_to_empty(ceviche_payload, make_sheet_generator):
    ceviche_payload["conservation"] = {}
    client = MagicMock()
    client.models.generate_content.return_value = make_text_response(json.dumps(ceviche_payload))

    sheet = make_sheet_generator(client).generate("Ceviche")

    assert sheet.conservation.refrigeration == ""
    assert sheet.conservation.freezing == ""


def test_client_error_401_maps_to_unauthorized(make_sheet_generator):
    client = MagicMock()
    client.models.generate_content.side_effect = genai_errors.ClientError(
        401, {"error": {"code": 401, "message": "API key not valid.", "status": "UNAUTHENTICATED"}}
    )

    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(client).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.UNAUTHORIZED
    assert exc_info.value.status_code == 401


def test_plain_error_mentioning_401_maps_to_unauthorized(make_sheet_generator):
    client = MagicMock()
    client.models.generate_content.side_effect = RuntimeError("Request failed with status 401")

    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(client).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.UNAUTHORIZED


def test_other_transport_errors_map_to_provider_error(make_sheet_generator):
    client = MagicMock()
    client.models.generate_content.side_effect = ConnectionError("model overloaded")

    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(client).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.PROVIDER_ERROR
    client.models.generate_content.assert_called_once()


def test_missing_client_maps_to_unauthorized(make_sheet_generator):
    with pytest.raises(SheetException) as exc_info:
        make_sheet_generator(None).generate("Ceviche")

    assert exc_info.value.code is SheetErrorCode.UNAUTHORIZED
