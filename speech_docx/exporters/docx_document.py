"""Word (.docx) exporter with right-to-left layout.

WHY: Dictated Hebrew text has to open in Word laid out right-to-left,
with the bold and underline the user applied in the editor. Word keeps
direction at two levels (section and paragraph) and formatting per run,
so both must be written explicitly.

HOW: Builds a python-docx Document with a single section. The section
properties and every paragraph get a <w:bidi/> marker; every run gets
its bold/underline flags plus <w:rtl/>. Bold runs also get <w:bCs/> so
the weight applies to complex-script (Hebrew) glyphs. The document is
saved into an in-memory buffer.

RULES:
- Exactly one section, RTL at section level
- Every paragraph RTL, one docx run per IR run, in order
- Run bold/underline are copied verbatim from the IR
- Output extension ".docx", Word MIME type
"""

from __future__ import annotations

import io
from typing import List

from docx import Document
from docx.oxml import OxmlElement
from docx.oxml.ns import qn

from speech_docx.core.ir import Paragraph
from speech_docx.exporters.base import BaseExporter

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Elements that must follow <w:bidi/> inside <w:sectPr>.
_SECTPR_BIDI_SUCCESSORS = (
    "w:rtlGutter", "w:docGrid", "w:printerSettings", "w:sectPrChange",
)

# Elements that must follow <w:bidi/> inside <w:pPr>.
_PPR_BIDI_SUCCESSORS = (
    "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind",
    "w:contextualSpacing", "w:mirrorIndents", "w:suppressOverlap", "w:jc",
    "w:textDirection", "w:textAlignment", "w:textboxTightWrap",
    "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr", "w:pPrChange",
)


def _set_bidi(props, successors) -> None:
    """Add <w:bidi/> to a properties element unless already present."""
    if props.find(qn("w:bidi")) is not None:
        return
    props.insert_element_before(OxmlElement("w:bidi"), *successors)


def _set_complex_script_bold(run) -> None:
    rpr = run._r.get_or_add_rPr()
    if rpr.find(qn("w:bCs")) is not None:
        return
    bold = rpr.find(qn("w:b"))
    if bold is not None:
        bold.addnext(OxmlElement("w:bCs"))


class DocxExporter(BaseExporter):
    """Exporter that produces a right-to-left Word document."""

    @property
    def name(self) -> str:
        return "Word Document"

    @property
    def extension(self) -> str:
        return ".docx"

    @property
    def media_type(self) -> str:
        return DOCX_MEDIA_TYPE

    def build_document(self, paragraphs: List[Paragraph]):
        """Build the python-docx Document for the given paragraphs."""
        doc = Document()
        _set_bidi(doc.sections[0]._sectPr, _SECTPR_BIDI_SUCCESSORS)

        for para in paragraphs:
            docx_para = doc.add_paragraph()
            _set_bidi(docx_para._p.get_or_add_pPr(), _PPR_BIDI_SUCCESSORS)
            for ir_run in para.runs:
                run = docx_para.add_run(ir_run.text)
                run.bold = ir_run.bold
                run.underline = ir_run.underline
                run.font.rtl = True
                if ir_run.bold:
                    _set_complex_script_bold(run)
        return doc

    def render(self, paragraphs: List[Paragraph]) -> bytes:
        buffer = io.BytesIO()
        self.build_document(paragraphs).save(buffer)
        return buffer.getvalue()
