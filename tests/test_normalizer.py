from draft_dedupe.schema import BlockKind
from draft_dedupe.steps import WhitespaceNormalizer


def test_prose_whitespace_is_collapsed_case_and_punctuation_kept() -> None:
    normalizer = WhitespaceNormalizer()

    assert normalizer.normalize(BlockKind.PARAGRAPH, "  Hello,\n   World!\t Again.  ") == "Hello, World! Again."
    assert normalizer.normalize(BlockKind.HEADING, "##   Unwrapping   Safely") == "## Unwrapping Safely"


def test_code_only_loses_outer_blank_lines() -> None:
    normalizer = WhitespaceNormalizer()
    raw = "\n   \n```\nif x:\n    y  =  1\n\nz = 2\n```\n\n"

    assert normalizer.normalize(BlockKind.CODE, raw) == "```\nif x:\n    y  =  1\n\nz = 2\n```"


def test_kind_transform_override() -> None:
    normalizer = WhitespaceNormalizer(kind_transforms={BlockKind.HEADING: lambda text: text.lstrip("# ").lower()})

    assert normalizer.normalize(BlockKind.HEADING, "## Summary") == "summary"
    assert normalizer.normalize(BlockKind.PARAGRAPH, "Keep  Case") == "Keep Case"
