"""
Look generation through a Gemini image model.
"""
import logging
import os
from typing import Optional, Sequence, Tuple

import aiohttp
import google.generativeai as genai

from .types import ClothingItem, Scene

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """Raised when the model response carries no image."""


def build_prompt(item: ClothingItem, scene: Scene) -> str:
    """Instructions for placing the catalog garment on the captured person."""
    return f"""You are a professional fashion photographer and AI stylist.

I am giving you TWO reference images:
1. PERSON PHOTO - the exact person who wants to try on the outfit
2. OUTFIT PHOTO - the exact clothing item from our catalog

Generate a single high-quality, photorealistic lifestyle fashion photo of THIS EXACT PERSON (image 1)
wearing the clothing item extracted from the OUTFIT PHOTO (image 2).
The person in the final image must be the person from image 1, NOT the model or mannequin shown in image 2.

The photo should be set in: {scene.prompt}

Preserve from the PERSON PHOTO exactly as they are: face, facial hair, hair, body type and proportions,
skin tone, apparent age and ethnicity.

OUTFIT rules:
- Ignore any model or mannequin in the OUTFIT PHOTO
- Extract ONLY the garment: its color, cut, fabric texture, pattern and style
- Show the full outfit clearly (full or 3/4 body shot)

PHOTO quality:
- Magazine-quality editorial photography
- Natural, flattering lighting appropriate to {scene.label}
- Photorealistic, no text, logos or watermarks

The result must look like a real photo of THIS SPECIFIC PERSON wearing that outfit in that location."""


class GeminiLookGenerator:
    """Generates looks with a Gemini image model via google-generativeai."""

    def __init__(self, model: str, api_key: Optional[str] = None, api_key_env: str = "GEMINI_API_KEY",
                 fetch_timeout_s: float = 20.0, response_modalities: Sequence[str] = ("IMAGE", "TEXT")):
        """
        Initialize the generator.

        Args:
            model: Gemini model name capable of image output
            api_key: API key; read from `api_key_env` when omitted
            api_key_env: Environment variable holding the key
            fetch_timeout_s: Timeout for downloading the garment image
            response_modalities: Output kinds requested from the model; must include IMAGE
        """
        api_key = api_key or os.getenv(api_key_env)
        if not api_key:
            logger.warning(f"{api_key_env} not found. Look generation will fail.")
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model)
        self.fetch_timeout_s = fetch_timeout_s
        self.generation_config = {"response_modalities": list(response_modalities)}

    async def fetch_garment(self, url: str) -> Tuple[bytes, str]:
        """Download the catalog image. Returns (bytes, mime type)."""
        timeout = aiohttp.ClientTimeout(total=self.fetch_timeout_s)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(url) as response:
                response.raise_for_status()
                data = await response.read()
                return data, response.content_type or "image/jpeg"

    async def generate_look(self, photo: bytes, item: ClothingItem, scene: Scene) -> bytes:
        garment, garment_mime = await self.fetch_garment(item.image_url)

        contents = [
            {"mime_type": "image/jpeg", "data": photo},
            "PERSON PHOTO - this is the person who wants to try on the outfit:",
            {"mime_type": garment_mime, "data": garment},
            f"OUTFIT PHOTO - this is the EXACT clothing item to use ({item.name} by {item.brand}):",
            build_prompt(item, scene),
        ]

        logger.info(f"🎨 Generating look: item={item.id} scene={scene.id}")
        response = await self.model.generate_content_async(contents, generation_config=self.generation_config)

        for candidate in response.candidates or []:
            for part in candidate.content.parts:
                inline = getattr(part, "inline_data", None)
                if inline is not None and inline.data:
                    return inline.data

        raise GenerationError(f"No image in response for scene {scene.id}")
