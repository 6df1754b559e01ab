"""Astroid Gateway - builds trees from source text."""

import astroid

from layout_linter.domain.protocols import AstroidProtocol


class AstroidGateway(AstroidProtocol):
    """Parses source text into astroid modules. Trees are never cached."""

    def parse_source(self, source: str, path: str) -> astroid.nodes.Module:
        """Parse ``source``; raises astroid.AstroidSyntaxError on invalid code."""
        return astroid.parse(source, path=path)
