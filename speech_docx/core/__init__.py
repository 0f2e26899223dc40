"""Core session, markup, and parsing modules.

WHY: The core package holds the two algorithms everything else depends
on: merging recognition hypotheses into the editor, and flattening the
editor's markup into styled runs. It also holds the data they exchange.

HOW: ir.py defines Run/Paragraph/StyleContext, markup.py the markup tree
and its HTML reader/writer, editor.py the in-memory rich-text model,
parser.py the tree-to-runs conversion, session.py the dictation state
machine, errors.py the typed failures.

RULES:
- IR dataclasses are the contract with exporters
- Nothing in core performs file or network I/O
"""
