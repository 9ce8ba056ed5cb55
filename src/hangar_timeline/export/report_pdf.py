"""
src/hangar_timeline/export/report_pdf.py

MD to PDF conversion layer (engine-pluggable) for the schedule report.

Rules:
- This module is NOT part of the scheduling core.
- No propagation, no filtering, no snapshot access: input is the Markdown file.
- Deterministic conversion for a fixed input + engine + options.
- Engines MUST be explicitly chosen (no implicit default engine selection).

Engines:
- "simple": built-in, pure-Python minimal PDF generator (multi-page, Helvetica)
- "reportlab": platypus document with real tables for the task listings
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import ListFlowable, ListItem, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


class PdfEngine(ABC):
    """Abstract base class for MD to PDF conversion engines."""

    name: str

    @abstractmethod
    def convert(self, md_path: Path, pdf_path: Path, **opts: Any) -> None:
        """Convert a Markdown file to PDF."""
        raise NotImplementedError


# -----------------------------------------------------------------------------
# Engine registry (explicit, no implicit defaults)
# -----------------------------------------------------------------------------

ENGINE_REGISTRY: Dict[str, PdfEngine] = {}


def register_engine(engine: PdfEngine) -> None:
    if not engine or not getattr(engine, "name", None):
        raise ValueError("Invalid PdfEngine: missing name")
    ENGINE_REGISTRY[engine.name] = engine


def get_engine(name: str) -> PdfEngine:
    try:
        return ENGINE_REGISTRY[name]
    except KeyError:
        raise KeyError(f"PDF engine not registered: {name}")


def convert_md_to_pdf(
    *,
    md_path: Path,
    pdf_path: Path,
    engine_name: str,
    engine_opts: Dict[str, Any] | None = None,
) -> None:
    """Convert a Markdown report file to PDF using an explicitly chosen engine."""
    md_path = Path(md_path)
    pdf_path = Path(pdf_path)
    if not md_path.exists():
        raise FileNotFoundError(f"report markdown not found: {md_path}")

    engine = get_engine(engine_name)
    opts = engine_opts or {}

    pdf_path.parent.mkdir(parents=True, exist_ok=True)
    engine.convert(md_path=md_path, pdf_path=pdf_path, **opts)


# -----------------------------------------------------------------------------
# Markdown normalization shared by the engines
# -----------------------------------------------------------------------------

_TABLE_RULE = re.compile(r"^\|(\s*:?-+:?\s*\|)+\s*$")
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_ITALIC = re.compile(r"(?<!\w)_(.+?)_(?!\w)")


def _read_md_lines(md_path: Path) -> List[str]:
    with md_path.open("r", encoding="utf-8") as f:
        return [raw.rstrip("\n").rstrip("\r") for raw in f.readlines()]


def _strip_inline(text: str) -> str:
    text = _BOLD.sub(r"\1", text)
    text = _ITALIC.sub(r"\1", text)
    return text.replace("<br>", "-").strip()


def _split_row(line: str) -> List[str]:
    return [c.strip() for c in line.strip().strip("|").split("|")]


def _normalize_md_to_plain(lines: List[str]) -> List[Tuple[int, str]]:
    """
    Convert Markdown lines to a simple (level, text) stream.

    Levels:
    - 1,2,3 for headings (#,##,###)
    - 0 for normal text (table rows are flattened with " | ")
    """
    out: List[Tuple[int, str]] = []
    for ln in lines:
        s = ln.strip()
        if not s:
            out.append((0, ""))
            continue
        if _TABLE_RULE.match(s):
            continue
        if s.startswith("# "):
            out.append((1, _strip_inline(s[2:])))
        elif s.startswith("## "):
            out.append((2, _strip_inline(s[3:])))
        elif s.startswith("### "):
            out.append((3, _strip_inline(s[4:])))
        elif s.startswith("|"):
            out.append((0, " | ".join(_strip_inline(c) for c in _split_row(s))))
        elif s.startswith("- ") or s.startswith("* "):
            out.append((0, f"• {_strip_inline(s[2:])}"))
        else:
            out.append((0, _strip_inline(s)))
    return out


# -----------------------------------------------------------------------------
# Built-in engine: simple (pure-Python, minimal PDF)
# -----------------------------------------------------------------------------

def _escape_pdf_text(s: str) -> str:
    # PDF literal strings: escape backslashes and parens
    return s.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


_HEADING_SIZES = {1: 16, 2: 14, 3: 12}


@dataclass(frozen=True)
class SimplePdfEngine(PdfEngine):
    """
    Minimal deterministic PDF generator.

    - A4 pages; content flows to a new page when the bottom margin is reached.
    - Plain text with simple heading sizing, Helvetica only.
    - Characters outside latin-1 are replaced.
    """
    name: str = "simple"

    def _paginate(self, items: List[Tuple[int, str]], *, height: int, margin_top: int, margin_bottom: int, line_gap: int) -> List[List[Tuple[int, str]]]:
        per_page = max(1, (height - margin_top - margin_bottom) // line_gap)
        pages = [items[i:i + per_page] for i in range(0, len(items), per_page)]
        return pages or [[]]

    def _content_stream(self, page: List[Tuple[int, str]], *, x: int, y: int, line_gap: int) -> bytes:
        ops: List[str] = ["BT", "/F1 11 Tf", f"{x} {y} Td"]
        for level, text in page:
            if text:
                ops.append(f"/F1 {_HEADING_SIZES.get(level, 11)} Tf")
                ops.append(f"({_escape_pdf_text(text)}) Tj")
            ops.append(f"0 {-line_gap} Td")
        ops.append("ET")
        return "\n".join(ops).encode("latin-1", "replace")

    def convert(self, md_path: Path, pdf_path: Path, **opts: Any) -> None:
        width = int(opts.get("page_width", 595))
        height = int(opts.get("page_height", 842))
        margin_left = int(opts.get("margin_left", 50))
        margin_top = int(opts.get("margin_top", 60))
        margin_bottom = int(opts.get("margin_bottom", 50))
        line_gap = int(opts.get("line_gap", 14))

        items = _normalize_md_to_plain(_read_md_lines(md_path))
        pages = self._paginate(items, height=height, margin_top=margin_top, margin_bottom=margin_bottom, line_gap=line_gap)

        # 1 catalog, 2 pages, 3 font, then (page, content) pairs
        page_ids = [4 + 2 * i for i in range(len(pages))]
        objects: Dict[int, bytes] = {
            1: b"<< /Type /Catalog /Pages 2 0 R >>",
            2: (
                "<< /Type /Pages /Kids ["
                + " ".join(f"{pid} 0 R" for pid in page_ids)
                + f"] /Count {len(pages)} >>"
            ).encode(),
            3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        }
        for pid, page in zip(page_ids, pages):
            stream = self._content_stream(page, x=margin_left, y=height - margin_top, line_gap=line_gap)
            objects[pid] = (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 {width} {height}] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {pid + 1} 0 R >>"
            ).encode()
            objects[pid + 1] = f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"

        out = bytearray()
        out.extend(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")

        offsets: List[int] = []
        for n in sorted(objects):
            offsets.append(len(out))
            out.extend(f"{n} 0 obj\n".encode() + objects[n] + b"\nendobj\n")

        xref_start = len(out)
        out.extend(f"xref\n0 {len(offsets) + 1}\n".encode())
        out.extend(b"0000000000 65535 f \n")
        for off in offsets:
            out.extend(f"{off:010d} 00000 n \n".encode())

        out.extend(b"trailer\n")
        out.extend(f"<< /Size {len(offsets) + 1} /Root 1 0 R >>\n".encode())
        out.extend(b"startxref\n")
        out.extend(f"{xref_start}\n".encode())
        out.extend(b"%%EOF\n")

        pdf_path.write_bytes(bytes(out))


# -----------------------------------------------------------------------------
# reportlab engine
# -----------------------------------------------------------------------------

def _markup(text: str) -> str:
    """Markdown inline → reportlab paragraph markup."""
    html = escape(text)
    html = html.replace("&lt;br&gt;", "<br/>")
    html = _BOLD.sub(r"<b>\1</b>", html)
    return _ITALIC.sub(r"<i>\1</i>", html)


class ReportLabEngine(PdfEngine):
    name = "reportlab"

    def _table(self, rows: List[List[str]], styles: Any) -> Table:
        cell_style = styles["BodyText"]
        data = [[Paragraph(_markup(c), cell_style) for c in row] for row in rows]
        table = Table(data, repeatRows=1, hAlign="LEFT")
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ]
            )
        )
        return table

    def convert(self, md_path: Path, pdf_path: Path, **opts: Any) -> None:
        styles = getSampleStyleSheet()
        story: List[Any] = []
        table_rows: List[List[str]] = []

        def flush_table() -> None:
            if table_rows:
                story.append(self._table(list(table_rows), styles))
                table_rows.clear()

        for line in _read_md_lines(md_path):
            s = line.strip()
            if s.startswith("|"):
                if not _TABLE_RULE.match(s):
                    table_rows.append(_split_row(s))
                continue
            flush_table()

            if not s:
                story.append(Spacer(1, 8))
            elif s.startswith("# "):
                story.append(Paragraph(_markup(s[2:]), styles["Heading1"]))
            elif s.startswith("## "):
                story.append(Paragraph(_markup(s[3:]), styles["Heading2"]))
            elif s.startswith("### "):
                story.append(Paragraph(_markup(s[4:]), styles["Heading3"]))
            elif s.startswith("- ") or s.startswith("* "):
                story.append(ListFlowable([ListItem(Paragraph(_markup(s[2:]), styles["Normal"]))], bulletType="bullet"))
            else:
                story.append(Paragraph(_markup(s), styles["Normal"]))
        flush_table()

        margin = int(opts.get("margin", 36))
        doc = SimpleDocTemplate(
            str(pdf_path),
            pagesize=A4,
            rightMargin=margin,
            leftMargin=margin,
            topMargin=margin,
            bottomMargin=margin,
        )
        doc.build(story)


register_engine(SimplePdfEngine())
register_engine(ReportLabEngine())


__all__ = [
    "PdfEngine",
    "ENGINE_REGISTRY",
    "SimplePdfEngine",
    "ReportLabEngine",
    "register_engine",
    "get_engine",
    "convert_md_to_pdf",
]
