import copy
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from google.genai import types

from chefmaster.image.generator import ImageGenerator
from chefmaster.session.store import InMemorySessionStore
from chefmaster.sheet.generator import SheetGenerator

PROMPT_DIR = Path(__file__).resolve().parents[1] / "chefmaster" / "sheet" / "prompt"

# 1x1 PNG
PNG_BYTES_B64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="

CEVICHE = {
    "dishName": "Ceviche",
    "category": "Entrada fría",
    "prepTime": "30 min",
    "description": "Pescado blanco curado en limón con cebolla morada y cilantro.",
    "ingredients": [
        {"name": "Corvina", "amount": 500, "unit": "g", "unitCost": 24, "subtotal": 12000, "category": "pescado"},
        {"name": "Limón", "amount": 200, "unit": "ml", "unitCost": 10, "subtotal": 2000, "category": "fruta"},
        {"name": "Cebolla morada", "amount": 150, "unit": "g", "unitCost": 20, "subtotal": 3000, "category": "vegetal"},
        {"name": "Cilantro", "amount": 30, "unit": "g", "unitCost": 50, "subtotal": 1500, "category": "especia"},
        {"name": "Ají", "amount": 20, "unit": "g", "unitCost": 75, "subtotal": 1500, "category": "vegetal"},
    ],
    "financials": {
        "totalCost": 20000,
        "yieldPortions": 1,
        "costPerPortion": 20000,
        "marginPercentage": 70,
        "suggestedPrice": 66000,
    },
    "miseEnPlace": ["Cortar la corvina en cubos de 1 cm", "Exprimir los limones"],
    "preparationSteps": [
        {"step": 1, "description": "Mezclar el pescado con el jugo de limón.", "temp": "4°C", "time": "10 min"},
        {"step": 2, "description": "Agregar cebolla, cilantro y ají."},
    ],
    "plating": "Servir en plato hondo frío.",
    "variants": "Con mango o leche de tigre.",
    "allergens": ["Pescado"],
    "conservation": {"refrigeration": "Consumir en el día.", "freezing": "No recomendado."},
    "qcChecklist": ["Pescado fresco", "Temperatura de servicio < 5°C"],
    "imagePrompt": "Ceviche de corvina en plato hondo de cerámica",
}


@pytest.fixture
def ceviche_payload():
    return copy.deepcopy(CEVICHE)


def make_text_response(text):
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))]
    )


def make_image_response(data: bytes, mime_type: str = "image/png"):
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(
            role="model",
            parts=[
                types.Part(text="Aquí está tu imagen."),
                types.Part(inline_data=types.Blob(data=data, mime_type=mime_type)),
            ],
        ))]
    )


@pytest.fixture
def text_client(ceviche_payload):
    client = MagicMock()
    client.models.generate_content.return_value = make_text_response(json.dumps(ceviche_payload))
    return client


@pytest.fixture
def image_client():
    client = MagicMock()
    client.models.generate_content.return_value = make_image_response(b"\x89PNG-fake")
    return client


@pytest.fixture
def make_sheet_generator():
    def _make(client):
        return SheetGenerator(
            client=client,
            model="gemini-test",
            system_prompt_path=PROMPT_DIR / "system.md",
            user_prompt_path=PROMPT_DIR / "user.md",
            response_schema_path=PROMPT_DIR / "technical_sheet.json",
        )
    return _make


@pytest.fixture
def make_image_generator():
    def _make(client):
        return ImageGenerator(client=client, model="gemini-image-test")
    return _make


@pytest.fixture
def store():
    return InMemorySessionStore()
