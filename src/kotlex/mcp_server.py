# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""MCP protocol layer exposing the analyzer as tools.

This module contains no analysis logic; every tool delegates to
LexicalAnalyzer and returns the JSON form of the result.
"""

import logging
from typing import Any, Dict, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.session import ServerSession

from kotlex.analyzer import LexicalAnalyzer
from kotlex.config import Config
from kotlex.languages import Language

logger = logging.getLogger(__name__)


class KotlexMCPServer:
    """MCP server with two tools.

    Tools:
    - analyze_file: Analyze a .java/.kt file on disk
    - analyze_source: Analyze source text passed inline
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        analyzer: Optional[LexicalAnalyzer] = None,
    ):
        """Initialize MCP server.

        Args:
            config: Configuration object. If None, loads from default location.
            analyzer: Analyzer instance. If None, creates one from config.
        """
        if config is None:
            config = Config()
        self.config = config
        self.analyzer = analyzer if analyzer is not None else LexicalAnalyzer(config)

        self.mcp = FastMCP(name="kotlex")
        self._register_tools()

        logger.info("KotlexMCPServer initialized")

    def _register_tools(self) -> None:
        @self.mcp.tool()
        async def analyze_file(
            file_path: str,
            ctx: Context[ServerSession, None],
        ) -> Dict[str, Any]:
            """Tokenize a Java or Kotlin file and report E1-E4 diagnostics.

            Args:
                file_path: Path to the .java or .kt file
                ctx: MCP context for logging

            Returns:
                Dictionary with tokens, comments, declarations, diagnostics
                and a per-code summary.
            """
            await ctx.info(f"Analyzing file: {file_path}")
            try:
                result = self.analyzer.analyze_file(file_path)
            except Exception as e:
                await ctx.error(f"Error analyzing {file_path}: {e}")
                raise
            return result.to_dict()

        @self.mcp.tool()
        async def analyze_source(
            source: str,
            ctx: Context[ServerSession, None],
            language: str = "kotlin",
        ) -> Dict[str, Any]:
            """Tokenize inline source text and report E1-E4 diagnostics.

            Args:
                source: Source text to analyze
                ctx: MCP context for logging
                language: "java" or "kotlin"

            Returns:
                Same structure as analyze_file.
            """
            await ctx.info(f"Analyzing {len(source)} characters of {language} source")
            try:
                lang = Language(language.lower())
            except ValueError as e:
                await ctx.error(f"Unsupported language '{language}': {e}")
                raise
            result = self.analyzer.analyze_source(source, language=lang)
            return result.to_dict()

        logger.info("MCP tools registered: analyze_file, analyze_source")

    def run(self, transport: str = "stdio") -> None:
        """Run the MCP server.

        Args:
            transport: "stdio", "streamable-http" or "sse".
        """
        logger.info(f"Starting MCP server with {transport} transport")
        self.mcp.run(transport=transport)  # type: ignore[arg-type]
