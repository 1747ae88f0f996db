"""Unit tests for callout rendering and sentinel restoration."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from unittest.mock import Mock

import pytest

from srclight.blocks import Callout, CalloutMark, RenderedFragment, SourceBlock
from srclight.exceptions import CalloutRestorationError, RenderingError
from srclight.options import DocumentOptions
from srclight.restoration import CalloutRenderer, restore_annotations
from srclight.shield import shield_source

NONCE = "QWERTYUI"


@pytest.mark.unit
class TestCalloutRenderer:
    """Test bubble markup per backend and icon setting."""

    def test_text_bubble_keeps_guard(self):
        renderer = CalloutRenderer()
        assert renderer.render_callout(Callout(1, "# ")) == '# <b class="conum">(1)</b>'

    def test_text_bubble_without_guard(self):
        assert CalloutRenderer().render_callout(Callout(7)) == '<b class="conum">(7)</b>'

    def test_xml_bubble(self):
        rendered = CalloutRenderer().render_callout(Callout(2, xml=True))
        assert rendered == '&lt;!--<b class="conum">(2)</b>--&gt;'

    def test_font_icons(self):
        rendered = CalloutRenderer(icons="font").render_callout(Callout(3, "// "))
        assert rendered == '<i class="conum" data-value="3"></i><b>(3)</b>'

    def test_image_icons(self):
        renderer = CalloutRenderer(icons="", iconsdir="assets/icons/", icontype="svg")
        assert renderer.render_callout(Callout(4)) == '<img src="assets/icons/callouts/4.svg" alt="4">'

    def test_docbook_uses_list_and_sequence_ids(self):
        renderer = CalloutRenderer(backend="docbook5", list_index=2)

        assert renderer.render_callout(Callout(5, "# ")) == '<co xml:id="CO2-1"/>'
        assert renderer.render_callout(Callout(9)) == '<co xml:id="CO2-2"/>'
        assert renderer.rendered_count == 2

    def test_mark_bubbles_are_space_separated(self):
        mark = CalloutMark(line=1, column=0, callouts=(Callout(2, "# "), Callout(3)))
        rendered = CalloutRenderer().render_mark(mark)
        assert rendered == '# <b class="conum">(2)</b> <b class="conum">(3)</b>'

    def test_for_document(self):
        options = DocumentOptions.from_attributes({"icons": "font"}, backend="html5")
        renderer = CalloutRenderer.for_document(options, list_index=3)

        assert renderer.icons == "font"
        assert renderer.list_index == 3


@pytest.mark.unit
class TestRestoreAnnotations:
    """Test sentinel replacement in rendered output."""

    def _shielded(self, text):
        return shield_source(SourceBlock.from_text(text, "ruby"), nonce=NONCE)

    def test_restores_inside_token_markup(self):
        shielded = self._shielded("puts 1 # <1>")
        fragment = RenderedFragment(
            '<span class="tok-nb">puts</span> <span class="tok-mi">1</span> '
            '<span class="tok-no">SRCLTQWERTYUICAZ</span>\n',
            trailing_newline=True,
        )

        restored = restore_annotations(fragment, shielded, CalloutRenderer())

        assert restored.content.endswith('<span class="tok-no"># <b class="conum">(1)</b></span>\n')
        assert restored.trailing_newline is True

    def test_restores_placeholders_verbatim(self):
        shielded = self._shielded("a \u00960\u0097")
        restored = restore_annotations(RenderedFragment("a SRCLTQWERTYUIPAZ"), shielded, CalloutRenderer())
        assert restored.content == "a \u00960\u0097"

    def test_missing_sentinel_raises(self):
        shielded = self._shielded("puts 1 # <1>")

        with pytest.raises(CalloutRestorationError) as exc_info:
            restore_annotations(
                RenderedFragment("puts 1 SRCLTQWER<span>TYUICAZ</span>"),
                shielded,
                CalloutRenderer(),
                highlighter_name="broken",
            )

        assert exc_info.value.match_count == 0
        assert exc_info.value.sentinel == "SRCLTQWERTYUICAZ"
        assert "broken" in str(exc_info.value)

    def test_duplicated_sentinel_raises(self):
        shielded = self._shielded("puts 1 # <1>")
        fragment = RenderedFragment("SRCLTQWERTYUICAZ SRCLTQWERTYUICAZ")

        with pytest.raises(CalloutRestorationError) as exc_info:
            restore_annotations(fragment, shielded, CalloutRenderer())

        assert exc_info.value.match_count == 2

    def test_line_structure_change_raises(self):
        shielded = self._shielded("puts 1 # <1>")
        renderer = Mock()
        renderer.render_mark.return_value = "one\ntwo"

        with pytest.raises(RenderingError) as exc_info:
            restore_annotations(RenderedFragment("puts 1 SRCLTQWERTYUICAZ"), shielded, renderer)

        assert not isinstance(exc_info.value, CalloutRestorationError)
        assert exc_info.value.rendering_stage == "callout_restoration"

    def test_no_sentinels_returns_fragment_unchanged(self):
        fragment = RenderedFragment("plain")
        assert restore_annotations(fragment, self._shielded("plain"), CalloutRenderer()) is fragment
