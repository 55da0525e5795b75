"""Tests for match models."""

from emoji_rewriter.models.match import CodepointSequence, MatchSpan


class TestCodepointSequence:
    """Tests for CodepointSequence."""

    def test_from_text(self) -> None:
        seq = CodepointSequence.from_text("\U0001f600")
        assert seq.code_points == (0x1F600,)
        assert len(seq) == 1

    def test_from_text_joins_surrogate_pair(self) -> None:
        seq = CodepointSequence.from_text("\ud83d\ude00")
        assert seq.code_points == (0x1F600,)

    def test_from_hex(self) -> None:
        seq = CodepointSequence.from_hex("1f468-200d-1f4bb")
        assert seq.code_points == (0x1F468, 0x200D, 0x1F4BB)

    def test_to_hex(self) -> None:
        seq = CodepointSequence((0x2764, 0xFE0F))
        assert seq.to_hex() == "2764-fe0f"
        assert seq.to_hex(" ") == "2764 fe0f"

    def test_str(self) -> None:
        assert str(CodepointSequence((0x2764, 0xFE0F))) == "\u2764\ufe0f"


class TestIconKey:
    """Tests for CodepointSequence.icon_key."""

    def test_single(self) -> None:
        assert CodepointSequence((0x1F600,)).icon_key == "1f600"

    def test_drops_variation_selector(self) -> None:
        assert CodepointSequence((0x2764, 0xFE0F)).icon_key == "2764"

    def test_keycap_drops_selector(self) -> None:
        seq = CodepointSequence.from_text("1\ufe0f\u20e3")
        assert seq.icon_key == "31-20e3"

    def test_zwj_keeps_selector(self) -> None:
        # rainbow flag: white flag + VS16 + ZWJ + rainbow
        seq = CodepointSequence((0x1F3F3, 0xFE0F, 0x200D, 0x1F308))
        assert seq.icon_key == "1f3f3-fe0f-200d-1f308"

    def test_lowercase_hex(self) -> None:
        assert CodepointSequence((0x1F1FA, 0x1F1F8)).icon_key == "1f1fa-1f1f8"


class TestMatchSpan:
    """Tests for MatchSpan."""

    def test_key_and_dict(self) -> None:
        span = MatchSpan(
            start=6,
            end=8,
            sequence=CodepointSequence((0x1F600,)),
            text="\U0001f600",
            char_start=6,
            char_end=7,
        )
        assert span.key == "1f600"
        assert span.as_dict() == {
            "start": 6,
            "end": 8,
            "key": "1f600",
            "text": "\U0001f600",
            "code_points": "1f600",
        }

    def test_dict_keeps_raw_text(self) -> None:
        span = MatchSpan(
            start=0,
            end=2,
            sequence=CodepointSequence((0x1F600,)),
            text="\ud83d\ude00",
            char_start=0,
            char_end=2,
        )
        assert span.as_dict()["text"] == "\ud83d\ude00"
