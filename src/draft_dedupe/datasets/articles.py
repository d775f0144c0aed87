from __future__ import annotations

# Sections of the reference article that drafts are derived from, as
# (heading, paragraphs) pairs. A paragraph starting with ``` is emitted as a
# fenced code block.
OPTIONALS_ARTICLE: list[tuple[str, list[str]]] = [
    (
        "# Optional values and mutability",
        [
            "Most bugs around missing data start with a value that was assumed to be present.",
            "An optional type makes the absence explicit, so the compiler can remind you to handle it.",
        ],
    ),
    (
        "## Unwrapping safely",
        [
            "Before using an optional you have to unwrap it. Forced unwrapping crashes when the value is absent.",
            "```swift\nif let name = user.name {\n    print(\"Hello, \\(name)\")\n}\n```",
            "Binding the value inside a conditional keeps the happy path readable.",
        ],
    ),
    (
        "## Constants and variables",
        [
            "Values declared with let cannot be reassigned after initialization.",
            "Prefer constants by default and reach for variables only when the value really changes.",
        ],
    ),
    (
        "## Summary",
        [
            "Optionals describe absence and constants describe stability; together they remove two common sources of bugs.",
        ],
    ),
]

# Replacement headings used to build a restructured draft.
RESTRUCTURED_HEADINGS = [
    "# Intro",
    "## Why absence matters",
    "## Working with wrapped values",
    "## Immutable by default",
    "## Wrapping up",
]

INTRO_PARAGRAPH = "This draft reorganises the material into a workshop handout with an extra introduction."

REWORDINGS = [
    " In practice this comes up constantly.",
    " The same idea appears in many languages.",
    " Keep this in mind for the examples below.",
]
