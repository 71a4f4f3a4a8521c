import json

from storefront.infrastructure.saleor.editorjs import editorjs_to_text


class TestEditorJs:

    def test_paragraphs_joined(self):
        description = json.dumps(
            {
                "time": 1,
                "blocks": [
                    {"type": "paragraph", "data": {"text": "Fresh."}},
                    {"type": "header", "data": {"text": "Ignored", "level": 2}},
                    {"type": "paragraph", "data": {"text": "Cold-pressed."}},
                ],
            }
        )

        assert editorjs_to_text(description) == "Fresh.\n\nCold-pressed."

    def test_plain_text_passes_through(self):
        assert editorjs_to_text("Just text") == "Just text"

    def test_empty(self):
        assert editorjs_to_text(None) is None
        assert editorjs_to_text("") is None

    def test_json_without_blocks_passes_through(self):
        assert editorjs_to_text('{"foo": 1}') == '{"foo": 1}'
