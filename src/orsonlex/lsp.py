"""Minimal LSP server for Orson: semantic tokens and unterminated-string warnings."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_RANGE,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    SemanticTokensRangeParams,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from orsonlex.engine import Classification, classify
from orsonlex.mode import ORSON_MODE, ModeDescriptor, mode_for_path
from orsonlex.regions import line_start
from orsonlex.tokens import LineIndex, RegionKind, TokenClass

# Standard LSP token type per class; legend order follows TokenClass
TOKEN_TYPES: dict[TokenClass, str] = {
    TokenClass.OPERATOR: "operator",
    TokenClass.CLAUSE_KEYWORD: "keyword",
    TokenClass.QUOTED_NAME: "enumMember",
    TokenClass.PLAIN_NAME: "function",
    TokenClass.SIMPLE_TYPE: "type",
    TokenClass.JOKER_TYPE: "typeParameter",
    TokenClass.STRING: "string",
    TokenClass.COMMENT: "comment",
}
_TYPE_INDEX = {cls: i for i, cls in enumerate(TokenClass)}

LEGEND = SemanticTokensLegend(
    token_types=[TOKEN_TYPES[cls] for cls in TokenClass],
    token_modifiers=[],
)

server = LanguageServer("orsonlex-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _mode_for(uri: str) -> ModeDescriptor:
    path = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    return mode_for_path(path) or ORSON_MODE


def encode_tokens(text: str, result: Classification, index: LineIndex | None = None) -> list[int]:
    """Encode spans as LSP relative semantic token data, one token per line piece."""
    if index is None:
        index = LineIndex(text)
    data: list[int] = []
    prev_line = 0
    prev_col = 0
    for span in result.spans:
        pos = span.start
        while pos < span.end:
            nl = text.find("\n", pos, span.end)
            piece_end = span.end if nl == -1 else nl
            if piece_end > pos:
                where = index.position(pos)
                line = where.line - 1
                col = where.column - 1
                delta_start = col - prev_col if line == prev_line else col
                length = piece_end - pos
                data.extend([line - prev_line, delta_start, length, _TYPE_INDEX[span.cls], 0])
                prev_line, prev_col = line, col
            pos = span.end if nl == -1 else nl + 1
    return data


def _semantic_tokens(ls: LanguageServer, uri: str, range_: Range | None = None) -> SemanticTokens:
    """Classify a document (or the lines of ``range_``) and encode the result."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    index = LineIndex(source)
    start, end = 0, len(source)
    if range_ is not None:
        start = line_start(source, index.offset(range_.start.line + 1, range_.start.character + 1))
        end = index.offset(range_.end.line + 1, range_.end.character + 1)
    result = classify(source, start, end, _mode_for(uri))
    return SemanticTokens(data=encode_tokens(source, result, index))


def _validate(ls: LanguageServer, uri: str) -> None:
    """Classify the document and publish a warning per unterminated string."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source
    index = LineIndex(source)
    diagnostics: list[Diagnostic] = []

    mode = _mode_for(uri)
    result = classify(source, mode=mode)
    for region in result.regions:
        if region.kind != RegionKind.STRING or region.terminated:
            continue
        where = index.position(region.open)
        line = where.line - 1
        col = where.column - 1
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + len(mode.string_delimiter)),
                ),
                message="unterminated string literal",
                severity=DiagnosticSeverity.Warning,
                source="orsonlex",
            )
        )

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    return _semantic_tokens(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_RANGE, LEGEND)
def semantic_tokens_range(ls: LanguageServer, params: SemanticTokensRangeParams) -> SemanticTokens:
    return _semantic_tokens(ls, params.text_document.uri, params.range)


def main() -> None:
    server.start_io()
