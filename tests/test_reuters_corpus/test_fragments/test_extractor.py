"""Tests for chunk-boundary-safe fragment extraction."""

import pytest

from reuters_corpus.character import iter_decoded_blocks
from reuters_corpus.fragments import FragmentExtractor, extract_fragments
from reuters_corpus.shared.config import FragmentConfig

FRAGMENT_1 = (
    '<REUTERS TOPICS="YES" LEWISSPLIT="TRAIN" NEWID="1">\n'
    "<DATE>26-FEB-1987 15:01:01.79</DATE>\n"
    "<TOPICS><D>cocoa</D></TOPICS>\n"
    "<TEXT><TITLE>BAHIA COCOA REVIEW</TITLE>"
    "<BODY>Showers continued throughout the week.</BODY></TEXT>\n"
    "</REUTERS>"
)
FRAGMENT_2 = (
    '<REUTERS TOPICS="NO" LEWISSPLIT="TEST" NEWID="2">\n'
    "<TEXT><TITLE>SÃO PAULO – café €</TITLE></TEXT>\n"
    "</REUTERS>"
)
FRAGMENT_3 = '<REUTERS NEWID="3"><TEXT>Plain text</TEXT></REUTERS>'

SEGMENT = (
    '<!DOCTYPE lewis SYSTEM "lewis.dtd">\n'
    + FRAGMENT_1 + "\n"
    + FRAGMENT_2 + "\n"
    + FRAGMENT_3 + "\n"
)


def chunk_text(text: str, size: int):
    """Split text into fixed-size pieces."""
    return [text[i:i + size] for i in range(0, len(text), size)]


class TestFragmentExtractor:
    """Test FragmentExtractor buffering and emission."""

    def test_single_chunk_emits_all_fragments(self) -> None:
        """Test that a whole segment in one chunk yields every fragment."""
        extractor = FragmentExtractor()

        fragments = extractor.feed(SEGMENT)

        assert fragments == [FRAGMENT_1, FRAGMENT_2, FRAGMENT_3]
        assert extractor.fragments_emitted == 3

    @pytest.mark.parametrize("size", [1, 2, 3, 7, 16, 64, 100, 1000])
    def test_every_chunking_yields_identical_fragments(self, size: int) -> None:
        """Test that fragment output does not depend on chunk boundaries."""
        fragments = list(extract_fragments(chunk_text(SEGMENT, size)))

        assert fragments == [FRAGMENT_1, FRAGMENT_2, FRAGMENT_3]

    def test_irregular_chunking_yields_identical_fragments(self) -> None:
        """Test uneven chunk sizes against a single-chunk read."""
        cuts = [0, 5, 6, 40, 41, 42, 200, 333, 334, len(SEGMENT)]
        chunks = [SEGMENT[a:b] for a, b in zip(cuts, cuts[1:])]

        assert list(extract_fragments(chunks)) == list(extract_fragments([SEGMENT]))

    def test_byte_chunking_through_multibyte_characters(self) -> None:
        """Test splitting raw bytes inside multi-byte UTF-8 sequences."""
        data = SEGMENT.encode("utf-8")
        single = list(extract_fragments(iter_decoded_blocks(iter([data]))))

        for size in (1, 2, 3, 5):
            blocks = iter([data[i:i + size] for i in range(0, len(data), size)])
            assert list(extract_fragments(iter_decoded_blocks(blocks))) == single

        assert single[1] == FRAGMENT_2

    def test_close_marker_in_later_chunk(self) -> None:
        """Test that a fragment closed in a separate chunk is emitted whole."""
        extractor = FragmentExtractor()
        head, tail = FRAGMENT_1.split("</TEXT>")

        assert extractor.feed(head) == []
        assert extractor.feed("</TEXT>" + tail[:-3]) == []
        assert extractor.feed(tail[-3:]) == [FRAGMENT_1]

    def test_open_marker_without_close_is_retained(self) -> None:
        """Test that an unterminated fragment survives into the next call."""
        extractor = FragmentExtractor()

        extractor.feed(FRAGMENT_3 + "\n<REUTERS NEWID=\"4\"><TITLE>Hal")

        assert extractor.pending.startswith('<REUTERS NEWID="4">')

    def test_chunk_without_markers_is_absorbed(self) -> None:
        """Test that noise between fragments never grows the buffer."""
        extractor = FragmentExtractor()

        for _ in range(100):
            assert extractor.feed("noise between fragments\n") == []

        assert len(extractor.pending) <= len("<REUTERS") + 1

    def test_open_marker_split_across_chunks(self) -> None:
        """Test an open marker cut right after the tag name."""
        extractor = FragmentExtractor()

        assert extractor.feed("junk <REUTERS") == []
        assert extractor.feed(' NEWID="9"></REUTERS>') == ['<REUTERS NEWID="9"></REUTERS>']

    def test_longer_tag_with_same_prefix_is_not_a_fragment(self) -> None:
        """Test that <REUTERSX> does not open a fragment."""
        extractor = FragmentExtractor()

        assert extractor.feed("<REUTERSX>a</REUTERS>") == []

    def test_finish_drops_unterminated_fragment(self) -> None:
        """Test that an incomplete trailing fragment is dropped silently."""
        extractor = FragmentExtractor()
        extractor.feed(FRAGMENT_3 + '<REUTERS NEWID="5"><TITLE>cut')

        dropped = extractor.finish()

        assert dropped == len('<REUTERS NEWID="5"><TITLE>cut')
        assert extractor.pending == ""

    def test_finish_with_only_noise_reports_nothing(self) -> None:
        """Test that trailing newlines are not counted as a dropped fragment."""
        extractor = FragmentExtractor()
        extractor.feed(FRAGMENT_3 + "\n\n")

        assert extractor.finish() == 0

    def test_extract_is_lazy(self) -> None:
        """Test that fragments are yielded before later chunks are read."""
        consumed = []

        def chunks():
            for chunk in chunk_text(SEGMENT, 50):
                consumed.append(chunk)
                yield chunk

        iterator = FragmentExtractor().extract(chunks())
        first = next(iterator)

        assert first == FRAGMENT_1
        assert "".join(consumed) != SEGMENT

    def test_custom_root_tag(self) -> None:
        """Test extraction with a configured root tag."""
        extractor = FragmentExtractor(FragmentConfig(root_tag="DOC"))

        assert extractor.feed("<DOC id='1'>x</DOC><DOC>y</DOC>") == [
            "<DOC id='1'>x</DOC>",
            "<DOC>y</DOC>",
        ]

    def test_separate_extractors_do_not_share_state(self) -> None:
        """Test that buffers are per instance."""
        first = FragmentExtractor()
        second = FragmentExtractor()

        first.feed('<REUTERS NEWID="1">')

        assert second.pending == ""
        assert second.feed("</REUTERS>") == []
