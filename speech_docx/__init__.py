"""Speech-to-DOCX: live dictation into editable RTL rich text and Word export.

WHY: Browser-style speech recognition streams unstable interim hypotheses
followed by stable final ones. Users want that stream merged into a text
buffer they can edit and style (bold, underline), then downloaded as a
right-to-left Word document without losing the formatting.

HOW: Three-stage pipeline. Merge (TranscriptSession folds hypothesis
batches into the rich-text model), parse (RichTextParser flattens the
markup tree into styled runs per paragraph), export (pluggable exporters
turn runs into a file artifact). Each stage is independently testable.

RULES:
- The recognition engine is an injected adapter, never imported directly
- All exporters consume the same Paragraph/Run model
- Adding a new output format = one new exporter module, no core changes
"""

__version__ = "0.1.0"
