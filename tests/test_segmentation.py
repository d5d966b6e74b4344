from medprice.pricelist.segmentation import LineSegments, segment_line


def test_line_without_codes_is_all_prefix() -> None:
    line = "100 ml 20s 0.00 350.00"

    assert segment_line(line) == LineSegments(prefix=line, segments=())


def test_empty_line() -> None:
    assert segment_line("") == LineSegments(prefix="", segments=())


def test_leading_continuation_text_becomes_prefix() -> None:
    result = segment_line("0.00 45.00 DEF456 Ibuprofen")

    assert result.prefix == "0.00 45.00"
    assert result.segments == ("DEF456 Ibuprofen",)


def test_several_records_on_one_line_are_split_at_codes() -> None:
    line = "ABC123 Paracetamol 0.00 10.00 DEF456 Ibuprofen 0.16 25.50"

    result = segment_line(line)

    assert result.prefix == ""
    assert result.segments[0].startswith("ABC123")
    assert any(segment.startswith("DEF456") for segment in result.segments)
    assert " ".join(result.segments) == line


def test_code_split_across_tokens_starts_a_segment() -> None:
    result = segment_line("syrup ABCG 10 Paracetamol")

    assert result.prefix == "syrup"
    assert result.segments == ("ABCG 10 Paracetamol",)
