"""
Tests for Gemini image generation, Imagen batches and Pollinations URLs.
"""

import pytest

from backend.aurastudio.pollinations import build_image_url
from backend.aurastudio.errors import ValidationError

from fakes import candidate, genai_response, image_part, imagen_response, text_part


class TestImageGeneration:

    @pytest.mark.parametrize("body", [{"prompt": ""}, {"prompt": "   "}, {}, {"prompt": 7}])
    def test_prompt_is_required(self, client, genai_stub, body):
        r = client.post("/api/image-generation", json=body)
        assert r.status_code == 400
        assert r.json() == {"error": "Prompt is required"}
        genai_stub.models.generate_content.assert_not_called()

    def test_scenario_inline_image_is_returned(self, client, genai_stub):
        genai_stub.models.generate_content.return_value = genai_response(
            candidate(image_part("QUJD", "image/jpeg"))
        )

        r = client.post("/api/image-generation", json={"prompt": "a red fox"})

        assert r.status_code == 200
        data = r.json()
        assert data["success"] is True
        assert data["image"] == "QUJD"
        assert data["mimeType"] == "image/jpeg"
        assert isinstance(data["id"], str) and data["id"]

        kwargs = genai_stub.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-2.5-flash-image-preview"
        assert kwargs["contents"] == [{"role": "user", "parts": [{"text": "a red fox"}]}]

    def test_raw_bytes_are_base64_encoded_and_mime_defaults(self, client, genai_stub):
        genai_stub.models.generate_content.return_value = genai_response(
            candidate(image_part(b"ABC", None))
        )
        data = client.post("/api/generate", json={"prompt": "fox"}).json()
        assert data["image"] == "QUJD"
        assert data["mimeType"] == "image/png"

    def test_first_candidate_with_image_wins(self, client, genai_stub):
        genai_stub.models.generate_content.return_value = genai_response(
            candidate(text_part("thinking about it")),
            candidate(text_part("here you go"), image_part("Rmlyc3Q=", "image/webp")),
            candidate(image_part("U2Vjb25k", "image/png")),
        )
        data = client.post("/api/image-generation", json={"prompt": "fox"}).json()
        assert data["image"] == "Rmlyc3Q="
        assert data["mimeType"] == "image/webp"

    def test_identical_prompts_get_distinct_ids(self, client, genai_stub):
        genai_stub.models.generate_content.return_value = genai_response(candidate(image_part("QUJD")))
        first = client.post("/api/image-generation", json={"prompt": "fox"}).json()
        second = client.post("/api/image-generation", json={"prompt": "fox"}).json()
        assert first["id"] != second["id"]

    def test_text_only_response_is_502_with_joined_text(self, client, genai_stub):
        genai_stub.models.generate_content.return_value = genai_response(
            candidate(text_part("I can't draw that."), text_part("")),
            candidate(text_part("Try another prompt.")),
        )

        r = client.post("/api/image-generation", json={"prompt": "fox"})

        assert r.status_code == 502
        assert r.json() == {
            "error": "No image data returned from Gemini",
            "details": "I can't draw that.\nTry another prompt.",
        }

    def test_no_candidates_is_502(self, client, genai_stub):
        genai_stub.models.generate_content.return_value = genai_response()
        r = client.post("/api/image-generation", json={"prompt": "fox"})
        assert r.status_code == 502
        assert r.json()["details"] == ""

    def test_call_failure_is_500_with_message(self, client, genai_stub):
        genai_stub.models.generate_content.side_effect = RuntimeError("API key not valid")
        r = client.post("/api/image-generation", json={"prompt": "fox"})
        assert r.status_code == 500
        assert r.json() == {"error": "API key not valid"}
        assert genai_stub.models.generate_content.call_count == 1


class TestImagen:

    def test_batch_generation(self, client, genai_stub):
        genai_stub.models.generate_images.return_value = imagen_response(b"one", None, b"two")

        r = client.post("/api/imagen", json={"prompt": "Robot holding a red skateboard", "numberOfImages": 3})

        assert r.status_code == 200
        data = r.json()
        assert data["success"] is True
        assert data["numberOfImages"] == 3
        assert data["prompt"] == "Robot holding a red skateboard"
        assert data["images"] == [
            {"imageBytes": "b25l", "index": 1},
            {"imageBytes": "dHdv", "index": 2},
        ]
        kwargs = genai_stub.models.generate_images.call_args.kwargs
        assert kwargs["model"] == "imagen-4.0-generate-001"
        assert kwargs["config"] == {"number_of_images": 3}

    def test_defaults_to_four_images(self, client, genai_stub):
        genai_stub.models.generate_images.return_value = imagen_response()
        data = client.post("/api/imagen", json={"prompt": "robot"}).json()
        assert data["numberOfImages"] == 4
        assert data["images"] == []

    @pytest.mark.parametrize("count", [0, 5, "2", 2.5, True])
    def test_number_of_images_is_validated(self, client, genai_stub, count):
        r = client.post("/api/imagen", json={"prompt": "robot", "numberOfImages": count})
        assert r.status_code == 400
        genai_stub.models.generate_images.assert_not_called()

    def test_prompt_is_required(self, client, genai_stub):
        r = client.post("/api/imagen", json={"numberOfImages": 2})
        assert r.status_code == 400
        assert r.json() == {"error": "Prompt is required"}

    def test_failure_is_500(self, client, genai_stub):
        genai_stub.models.generate_images.side_effect = RuntimeError("quota exceeded")
        r = client.post("/api/imagen", json={"prompt": "robot"})
        assert r.status_code == 500
        assert r.json() == {"error": "Failed to generate images", "details": "quota exceeded"}


class TestPollinations:

    def test_url_is_built_locally(self):
        url = build_image_url("neon fox & moon", width=512, height=512, seed=42)
        assert url == (
            "https://pollinations.ai/p/neon%20fox%20%26%20moon"
            "?width=512&height=512&seed=42&nologo=true"
        )

    def test_empty_prompt_rejected(self):
        with pytest.raises(ValidationError):
            build_image_url("   ")

    def test_dimensions_must_be_positive(self):
        with pytest.raises(ValidationError):
            build_image_url("fox", width=0)

    def test_endpoint(self, client):
        r = client.get("/api/pollinations", params={"prompt": " fox ", "seed": 7})
        assert r.status_code == 200
        data = r.json()
        assert data["prompt"] == "fox"
        assert data["url"].startswith("https://pollinations.ai/p/fox?width=768&height=1024&seed=7")

    def test_endpoint_requires_prompt(self, client):
        r = client.get("/api/pollinations")
        assert r.status_code == 400
        assert r.json() == {"error": "Prompt is required"}
