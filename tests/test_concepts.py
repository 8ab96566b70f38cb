"""Tests for GeminiJSONProvider, ConceptGenerator and blueprint export."""

import json

import pytest

from conceptlab.concepts import (
    CharacterConcept,
    CharacterIntel,
    ConceptGenerator,
    PlotOutline,
    SinglePlotOutline,
    VisualStyle,
    render_blueprint,
)
from conceptlab.concepts.models import RawCharacterConcept
from conceptlab.llm import GeminiJSONProvider
from conceptlab.media.errors import ContentGenerationError, MissingCredentialError

from .conftest import fake_genai_text_client

CHARACTER_JSON = {
    "name": "Sonic Warden",
    "backstory": "Raised in a Wakandan outpost.",
    "powers": ["Sound manipulation", "Sonic shields"],
    "weaknesses": ["Vacuum environments"],
    "visualDescription": "Vibranium armor etched with glowing glyphs.",
}

PLOT_JSON = {
    "outlines": [
        {"title": f"Episode {i}", "plotPoints": ["Start", "Middle", "End"]}
        for i in (1, 2, 3)
    ]
}

STYLE_JSON = {
    "styleName": "Cosmic Flow",
    "aesthetic": "Kirby dots meet anime speed lines.",
    "characterDesign": "Angular silhouettes.",
    "colorPalette": "Magenta and cyan.",
    "backgroundStyle": "Painted nebulae.",
}

INTEL_JSON = {
    "characterName": "Doctor Doom",
    "aliases": ["Victor von Doom", "Lord Doom"],
    "baseOfOperations": "Latveria",
    "abilities": ["Genius intellect", "Sorcery"],
    "psychologicalProfile": "Arrogant and proud.",
    "weaknesses": ["Pride"],
}


def _generator(payload) -> tuple[ConceptGenerator, object]:
    client = fake_genai_text_client(json.dumps(payload))
    provider = GeminiJSONProvider("K", model="gemini-test", client=client)
    return ConceptGenerator(provider), client


# ---------------------------------------------------------------------------
# Tests: GeminiJSONProvider
# ---------------------------------------------------------------------------

class TestGeminiJSONProvider:
    async def test_sends_schema_and_sampling(self):
        client = fake_genai_text_client(json.dumps(CHARACTER_JSON))
        provider = GeminiJSONProvider("K", model="gemini-test", client=client)

        result = await provider.generate_json("pitch", RawCharacterConcept)

        assert result.visual_description.startswith("Vibranium")
        kwargs = client.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "pitch"
        config = kwargs["config"]
        assert config["response_mime_type"] == "application/json"
        assert config["temperature"] == 0.8
        assert config["top_p"] == 0.9
        assert "visualDescription" in config["response_json_schema"]["properties"]

    async def test_invalid_json(self):
        client = fake_genai_text_client("not json")
        provider = GeminiJSONProvider("K", client=client)
        with pytest.raises(ContentGenerationError, match="Failed to generate content"):
            await provider.generate_json("pitch", RawCharacterConcept)

    async def test_schema_mismatch(self):
        client = fake_genai_text_client(json.dumps({"name": "only a name"}))
        provider = GeminiJSONProvider("K", client=client)
        with pytest.raises(ContentGenerationError):
            await provider.generate_json("pitch", RawCharacterConcept)

    async def test_sdk_error_is_wrapped(self):
        client = fake_genai_text_client("{}")
        client.models.generate_content.side_effect = RuntimeError("400 bad request")
        provider = GeminiJSONProvider("K", client=client)
        with pytest.raises(ContentGenerationError) as exc_info:
            await provider.generate_json("pitch", RawCharacterConcept)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    async def test_missing_key(self):
        provider = GeminiJSONProvider(None)
        with pytest.raises(MissingCredentialError):
            await provider.generate_json("pitch", RawCharacterConcept)


# ---------------------------------------------------------------------------
# Tests: ConceptGenerator
# ---------------------------------------------------------------------------

class TestConceptGenerator:
    async def test_character(self):
        generator, client = _generator(CHARACTER_JSON)
        concept = await generator.character_concept("A sound-wave hero")
        assert isinstance(concept, CharacterConcept)
        assert concept.type == "character"
        assert concept.powers == ["Sound manipulation", "Sonic shields"]
        assert "A sound-wave hero" in client.models.generate_content.call_args.kwargs["contents"]

    async def test_plot(self):
        generator, client = _generator(PLOT_JSON)
        plot = await generator.plot_outline("Spider-Man", "Venom", "Redemption")
        assert plot.type == "plot"
        assert len(plot.outlines) == 3
        assert plot.outlines[0].plot_points == ["Start", "Middle", "End"]
        prompt = client.models.generate_content.call_args.kwargs["contents"]
        assert "Spider-Man" in prompt and "Venom" in prompt and "Redemption" in prompt

    @pytest.mark.parametrize("hero,villain,theme", [
        ("", "Venom", "Redemption"),
        ("Spider-Man", "  ", "Redemption"),
        ("Spider-Man", "Venom", ""),
    ])
    async def test_plot_requires_all_fields(self, hero, villain, theme):
        generator, client = _generator(PLOT_JSON)
        with pytest.raises(ValueError):
            await generator.plot_outline(hero, villain, theme)
        client.models.generate_content.assert_not_called()

    async def test_style(self):
        generator, _ = _generator(STYLE_JSON)
        style = await generator.visual_style("Kirby meets anime")
        assert isinstance(style, VisualStyle)
        assert style.style_name == "Cosmic Flow"

    async def test_intel(self):
        generator, _ = _generator(INTEL_JSON)
        intel = await generator.character_intel("Doctor Doom")
        assert isinstance(intel, CharacterIntel)
        assert intel.base_of_operations == "Latveria"

    def test_serializes_camel_case(self):
        concept = CharacterConcept.model_validate(CHARACTER_JSON)
        dumped = concept.model_dump(by_alias=True)
        assert dumped["visualDescription"] == CHARACTER_JSON["visualDescription"]
        assert dumped["type"] == "character"


# ---------------------------------------------------------------------------
# Tests: render_blueprint
# ---------------------------------------------------------------------------

class TestRenderBlueprint:
    def test_character(self):
        filename, text = render_blueprint(CharacterConcept.model_validate(CHARACTER_JSON))
        assert filename == "character-Sonic_Warden.txt"
        assert text.startswith("Character Blueprint: Sonic Warden\n\n== BACKSTORY ==\n")
        assert "== POWERS & ABILITIES ==\n- Sound manipulation\n- Sonic shields\n\n" in text
        assert text.endswith("== VISUAL DESCRIPTION ==\nVibranium armor etched with glowing glyphs.")

    def test_plot(self):
        filename, text = render_blueprint(PlotOutline.model_validate(PLOT_JSON))
        assert filename == "plot-outlines.txt"
        assert "== OUTLINE 1: Episode 1 ==\n- Start\n- Middle\n- End\n\n" in text
        assert "== OUTLINE 3: Episode 3 ==" in text

    def test_style(self):
        filename, text = render_blueprint(VisualStyle.model_validate(STYLE_JSON))
        assert filename == "style-guide-Cosmic_Flow.txt"
        assert "== BACKGROUND & ENVIRONMENT STYLE ==\nPainted nebulae." in text

    def test_intel(self):
        filename, text = render_blueprint(CharacterIntel.model_validate(INTEL_JSON))
        assert filename == "intel-briefing-Doctor_Doom.txt"
        assert text.startswith("INTELLIGENCE BRIEFING: DOCTOR DOOM\n\n")
        assert "KNOWN ALIASES: Victor von Doom, Lord Doom\n" in text
        assert "== EXPLOITABLE WEAKNESSES ==\n- Pride" in text

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            render_blueprint(SinglePlotOutline(title="x", plot_points=[]))
