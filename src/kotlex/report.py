# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""Report rendering for analysis results.

Human-readable output prints three boxes in a fixed order:
1. Symbol table (TOKEN / ATTRIBUTE / LINE), sorted by line then token
2. Comments
3. Error report followed by a per-code summary line

Colors use a soft 256-color palette keyed by token attribute and
diagnostic code. JSON output carries the same data without truncation.
"""

import json
import logging
from typing import Dict, Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from kotlex.models import AnalysisResult, DiagnosticCode, TokenKind

logger = logging.getLogger(__name__)

TOKEN_COLUMN_WIDTH = 40
COMMENT_WIDTH = 58
MESSAGE_WIDTH = 60

HEADER_STYLE = "bold color(225) on color(236)"
COMMENT_STYLE = "color(153)"
SUMMARY_STYLE = "color(120)"

TOKEN_STYLES: Dict[TokenKind, str] = {
    TokenKind.KEYWORD: "color(170)",
    TokenKind.IDENTIFIER: "color(120)",
    TokenKind.NUMBER: "color(159)",
    TokenKind.OPERATOR: "color(228)",
    TokenKind.SEPARATOR: "color(246)",
    TokenKind.STRING: "color(215)",
    TokenKind.CHAR: "color(180)",
    TokenKind.NAMESPACE: "color(244)",
}

DIAGNOSTIC_STYLES: Dict[DiagnosticCode, str] = {
    DiagnosticCode.E1: "color(203)",
    DiagnosticCode.E2: "color(208)",
    DiagnosticCode.E3: "color(203)",
    DiagnosticCode.E4: "color(203)",
}


def truncate(text: str, width: int) -> str:
    """Cut text to at most width characters."""
    return text if len(text) <= width else text[:width]


def format_summary(result: AnalysisResult) -> str:
    """Format the per-code summary line, e.g. 'E1=3  E2=1  E3=4  E4=9   Total=17'."""
    counts = result.summary()
    codes = "  ".join(f"{code.value}={counts[code.value]}" for code in DiagnosticCode)
    return f"{codes}   Total={counts['Total']}"


def format_json(result: AnalysisResult, indent: int = 2) -> str:
    """Serialize an analysis result as a JSON document."""
    return json.dumps(result.to_dict(), indent=indent)


class ReportRenderer:
    """Renders analysis results to a rich Console.

    Usage:
        renderer = ReportRenderer()
        renderer.render(result)
    """

    def __init__(self, console: Optional[Console] = None, color: bool = True):
        """Initialize renderer.

        Args:
            console: Console to print to. If None, creates a stdout console.
            color: Whether to emit colors (ignored when console is given).
        """
        if console is None:
            console = Console(no_color=not color, highlight=False)
        self.console = console

    def render(self, result: AnalysisResult) -> None:
        """Render symbol table, comments and error report, in that order."""
        self.render_symbol_table(result)
        self.render_comments(result)
        self.render_errors(result)

    def render_symbol_table(self, result: AnalysisResult) -> None:
        table = Table(
            title=f"SYMBOL TABLE - {result.filepath}",
            box=box.ASCII,
            header_style=HEADER_STYLE,
        )
        table.add_column("TOKEN", min_width=TOKEN_COLUMN_WIDTH, no_wrap=True)
        table.add_column("ATTRIBUTE", min_width=18, no_wrap=True)
        table.add_column("LINE", justify="right", min_width=6)

        for token in result.sorted_tokens():
            style = TOKEN_STYLES.get(token.kind, "")
            table.add_row(
                # keep one blank column after the longest token
                Text(truncate(token.text, TOKEN_COLUMN_WIDTH - 1), style=style),
                Text(token.kind.value, style=style),
                str(token.line),
            )

        self.console.print(table)

    def render_comments(self, result: AnalysisResult) -> None:
        table = Table(box=box.ASCII, header_style=HEADER_STYLE)
        table.add_column("COMMENTS", min_width=COMMENT_WIDTH, no_wrap=True)

        if not result.comments:
            table.add_row(Text("(no comments found)", style=COMMENT_STYLE))
        for comment in result.comments:
            # Block comments are shown on a single line
            flattened = " ".join(comment.text.split())
            table.add_row(Text(truncate(flattened, COMMENT_WIDTH), style=COMMENT_STYLE))

        self.console.print(table)

    def render_errors(self, result: AnalysisResult) -> None:
        if not result.diagnostics:
            table = Table(box=box.ASCII, header_style=HEADER_STYLE)
            table.add_column("ERROR REPORT", min_width=MESSAGE_WIDTH)
            table.add_row(Text("No errors found.", style=SUMMARY_STYLE))
            self.console.print(table)
            return

        table = Table(box=box.ASCII, header_style=HEADER_STYLE)
        table.add_column("ERROR REPORT", min_width=MESSAGE_WIDTH, no_wrap=True)
        table.add_column("LINE", justify="right", min_width=3)
        for diagnostic in result.diagnostics:
            table.add_row(
                Text(
                    truncate(diagnostic.message, MESSAGE_WIDTH),
                    style=DIAGNOSTIC_STYLES.get(diagnostic.code, ""),
                ),
                str(diagnostic.line),
            )
        self.console.print(table)

        summary = Text("Summary:", style=SUMMARY_STYLE)
        summary.append(f" {format_summary(result)}")
        self.console.print(summary)
