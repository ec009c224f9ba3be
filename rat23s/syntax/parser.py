# rat23s/syntax/parser.py
"""Backtracking recursive-descent parser for Rat23S.

One method per grammar production. Every method returns the explicit result
`MATCHED` or `FAILED`; nothing is thrown for an ordinary "this alternative
did not match".

Probe / commit
--------------
- `required=False` (probe): the production's *first* symbol may fail; the
  method then returns FAILED without having consumed the lookahead.
- once the first symbol has matched, every later symbol is required. A
  failure there goes straight to `_fatal()`, which writes the report to the
  sink and raises FatalSyntaxError to unwind to the driver.
- alternative-bearing productions go through `_try()`: snapshot the trace,
  push the alternative's label, attempt, restore on FAILED.

Right-recursive "Cont" productions (statement lists, id lists, `+`/`-`
chains ...) are run as loops. They push the same labels in the same order
as the recursive derivation, but only syntactic nesting uses Python stack.

Trace output: whenever a terminal matches, the labels accumulated since the
previous terminal are emitted together with the token and the trace starts
over.
"""

from __future__ import annotations
from functools import partial
from typing import Callable, Dict, NoReturn, Optional

from ..lex import Kind, Lexer, Token
from .sink import TraceSink
from .trace import ProductionTrace

MATCHED = True
FAILED = False

# class terminals (compared by token kind)
IDENTIFIER = "<identifier>"
INTEGER = "<integer>"
REAL = "<real>"
END = "$"

_CLASS_TERMINALS: Dict[str, str] = {
    IDENTIFIER: Kind.IDENTIFIER,
    INTEGER: Kind.INTEGER,
    REAL: Kind.REAL,
    END: Kind.EOF,
}
# literal terminals are compared case-insensitively against these kinds only
_LITERAL_KINDS = (Kind.KEYWORD, Kind.OPERATOR, Kind.SEPARATOR)

RELOPS = ("==", "!=", ">", "<", "<=", "=>")

_PRIMARY_EXPECTED = ("expected primary (<identifier>, <integer>, <real>,"
                     " (expression), true, or false)")


class FatalSyntaxError(SyntaxError):
    """Committed failure. The sink has already received the report."""
    def __init__(self, line: int, message: str, token: Optional[Token] = None):
        super().__init__(f"{line}: ERROR - {message}")
        self.line = line
        self.message = message
        self.token = token


def expected_message(symbol: str) -> str:
    if symbol == END:
        return "expected end of input"
    if symbol in _CLASS_TERMINALS:
        return f"expected {symbol}"
    return f"expected '{symbol}'"


class Parser:
    def __init__(self, lexer: Lexer, sink: TraceSink):
        self._lexer = lexer
        self._sink = sink
        self._trace = ProductionTrace()
        self._lookahead: Optional[Token] = None
        self._line = 1       # line of the last matched terminal
        self.matched = 0     # number of terminals matched so far

    @property
    def trace(self) -> ProductionTrace:
        return self._trace

    @property
    def lookahead(self) -> Optional[Token]:
        return self._lookahead

    # ------------------------------------------------------------------
    # driver
    # ------------------------------------------------------------------
    def rat23s(self) -> bool:
        """<Rat23S> -> <Opt Function Definitions> # <Opt Declaration List> # <Statement List> $

        Source and sink are closed on the way out, success or not.
        """
        try:
            self._trace.push("<Rat23S> -> <Opt Function Definitions> #"
                             " <Opt Declaration List> # <Statement List>")
            self.opt_function_definitions()
            self.check_symbol("#", required=True)
            self.opt_declaration_list()
            self.check_symbol("#", required=True)
            self.statement_list(required=True)
            self.check_symbol(END, required=True)
            return MATCHED
        finally:
            self._lexer.close()
            self._sink.close()

    # ------------------------------------------------------------------
    # terminals
    # ------------------------------------------------------------------
    def _fetch(self) -> Token:
        if self._lookahead is None:
            tok = self._lexer.get_token()
            while tok.kind == Kind.COMMENT:
                tok = self._lexer.get_token()
            self._lookahead = tok
            if tok.kind == Kind.ERROR:
                self._fatal(tok.lexeme, line=self._lexer.get_line_number())
        return self._lookahead

    @staticmethod
    def matches(tok: Token, symbol: str) -> bool:
        kind = _CLASS_TERMINALS.get(symbol)
        if kind is not None:
            return tok.kind == kind
        return tok.kind in _LITERAL_KINDS and tok.lexeme.lower() == symbol

    def check_symbol(self, symbol: str, required: bool = False) -> bool:
        tok = self._fetch()
        if not self.matches(tok, symbol):
            if required:
                self._fatal(expected_message(symbol))
            return FAILED

        self._sink.emit(self._trace.drain(), tok)
        self._lookahead = None
        self._line = self._lexer.get_line_number()
        self.matched += 1
        return MATCHED

    # ------------------------------------------------------------------
    # backtracking helpers
    # ------------------------------------------------------------------
    def _fatal(self, message: str, line: Optional[int] = None) -> NoReturn:
        if line is None:
            line = self._line
        self._sink.fatal(line, message, self._trace.drain(), self._lookahead)
        raise FatalSyntaxError(line, message, self._lookahead)

    def _try(self, label: str, attempt: Callable[[], bool]) -> bool:
        mark = self._trace.snapshot()
        self._trace.push(label)
        if attempt():
            return MATCHED
        self._trace.restore(mark)
        return FAILED

    def _no_match(self, required: bool, label: str, message: str) -> bool:
        if required:
            self._trace.push(label)
            self._fatal(message)
        return FAILED

    def _operator_then(self, symbol: str, operand: Callable[..., bool]) -> bool:
        """`symbol` probed, then `operand` required."""
        if not self.check_symbol(symbol):
            return FAILED
        operand(required=True)
        return MATCHED

    # ------------------------------------------------------------------
    # function definitions
    # ------------------------------------------------------------------
    def opt_function_definitions(self) -> bool:
        if self._try("<Opt Function Definitions> -> <Function Definitions>",
                     self.function_definitions):
            return MATCHED
        self._trace.push("<Opt Function Definitions> -> <Empty>")
        return MATCHED

    def function_definitions(self, required: bool = False) -> bool:
        if not self._function_definitions_head(required):
            return FAILED
        while self._try("<Function Definitions Cont> -> <Function Definitions>",
                        self._function_definitions_head):
            pass
        self._trace.push("<Function Definitions Cont> -> <Empty>")
        return MATCHED

    def _function_definitions_head(self, required: bool = False) -> bool:
        self._trace.push("<Function Definitions> -> <Function> <Function Definitions Cont>")
        return self.function(required)

    def function(self, required: bool = False) -> bool:
        self._trace.push("<Function> -> function <Identifier> ( <Opt Parameter List> )"
                         " <Opt Declaration List> <Body>")
        if not self.check_symbol("function", required):
            return FAILED
        self.check_symbol(IDENTIFIER, required=True)
        self.check_symbol("(", required=True)
        self.opt_parameter_list()
        self.check_symbol(")", required=True)
        self.opt_declaration_list()
        self.body()
        return MATCHED

    def opt_parameter_list(self) -> bool:
        if self._try("<Opt Parameter List> -> <Parameter List>", self.parameter_list):
            return MATCHED
        self._trace.push("<Opt Parameter List> -> <Empty>")
        return MATCHED

    def parameter_list(self, required: bool = False) -> bool:
        if not self._parameter_list_head(required):
            return FAILED
        while self._try("<Parameter List Cont> -> , <Parameter List>",
                        self._parameter_list_more):
            pass
        self._trace.push("<Parameter List Cont> -> <Empty>")
        return MATCHED

    def _parameter_list_head(self, required: bool = False) -> bool:
        self._trace.push("<Parameter List> -> <Parameter> <Parameter List Cont>")
        return self.parameter(required)

    def _parameter_list_more(self) -> bool:
        if not self.check_symbol(","):
            return FAILED
        self._parameter_list_head(required=True)
        return MATCHED

    def parameter(self, required: bool = False) -> bool:
        self._trace.push("<Parameter> -> <IDs> <Qualifier>")
        if not self.ids(required):
            return FAILED
        self.qualifier(required=True)
        return MATCHED

    def qualifier(self, required: bool = False) -> bool:
        for word in ("int", "bool", "real"):
            if self._try(f"<Qualifier> -> {word}", partial(self.check_symbol, word)):
                return MATCHED
        return self._no_match(required, "<Qualifier> -> int | bool | real",
                              "expected qualifier")

    def body(self) -> bool:
        self._trace.push("<Body> -> { <Statement List> }")
        self.check_symbol("{", required=True)
        self.statement_list(required=True)
        self.check_symbol("}", required=True)
        return MATCHED

    # ------------------------------------------------------------------
    # declarations
    # ------------------------------------------------------------------
    def opt_declaration_list(self) -> bool:
        if self._try("<Opt Declaration List> -> <Declaration List>", self.declaration_list):
            return MATCHED
        self._trace.push("<Opt Declaration List> -> <Empty>")
        return MATCHED

    def declaration_list(self, required: bool = False) -> bool:
        if not self._declaration_list_head(required):
            return FAILED
        while self._try("<Declaration List Cont> -> <Declaration List>",
                        self._declaration_list_head):
            pass
        self._trace.push("<Declaration List Cont> -> <Empty>")
        return MATCHED

    def _declaration_list_head(self, required: bool = False) -> bool:
        self._trace.push("<Declaration List> -> <Declaration> ; <Declaration List Cont>")
        if not self.declaration(required):
            return FAILED
        self.check_symbol(";", required=True)
        return MATCHED

    def declaration(self, required: bool = False) -> bool:
        self._trace.push("<Declaration> -> <Qualifier> <IDs>")
        if not self.qualifier(required):
            return FAILED
        self.ids(required=True)
        return MATCHED

    def ids(self, required: bool = False) -> bool:
        self._trace.push("<IDs> -> <Identifier> <IDs Cont>")
        if not self.check_symbol(IDENTIFIER, required):
            return FAILED
        while self._try("<IDs Cont> -> , <IDs>", self._ids_more):
            pass
        self._trace.push("<IDs Cont> -> <Empty>")
        return MATCHED

    def _ids_more(self) -> bool:
        if not self.check_symbol(","):
            return FAILED
        self._trace.push("<IDs> -> <Identifier> <IDs Cont>")
        self.check_symbol(IDENTIFIER, required=True)
        return MATCHED

    # ------------------------------------------------------------------
    # statements
    # ------------------------------------------------------------------
    def statement_list(self, required: bool = False) -> bool:
        if not self._statement_list_head(required):
            return FAILED
        while self._try("<Statement List Cont> -> <Statement List>",
                        self._statement_list_head):
            pass
        self._trace.push("<Statement List Cont> -> <Empty>")
        return MATCHED

    def _statement_list_head(self, required: bool = False) -> bool:
        self._trace.push("<Statement List> -> <Statement> <Statement List Cont>")
        return self.statement(required)

    def statement(self, required: bool = False) -> bool:
        alternatives = (
            ("<Statement> -> <Compound>", self.compound),
            ("<Statement> -> <Assign>", self.assign),
            ("<Statement> -> <If>", self.if_statement),
            ("<Statement> -> <Return>", self.return_statement),
            ("<Statement> -> <Print>", self.print_statement),
            ("<Statement> -> <Scan>", self.scan_statement),
            ("<Statement> -> <While>", self.while_statement),
        )
        for label, proc in alternatives:
            if self._try(label, proc):
                return MATCHED
        return self._no_match(
            required,
            "<Statement> -> <Compound> | <Assign> | <If> | <Return> | <Print>"
            " | <Scan> | <While>",
            "expected statement",
        )

    def compound(self, required: bool = False) -> bool:
        self._trace.push("<Compound> -> { <Statement List> }")
        if not self.check_symbol("{", required):
            return FAILED
        self.statement_list(required=True)
        self.check_symbol("}", required=True)
        return MATCHED

    def assign(self, required: bool = False) -> bool:
        self._trace.push("<Assign> -> <Identifier> = <Expression> ;")
        if not self.check_symbol(IDENTIFIER, required):
            return FAILED
        self.check_symbol("=", required=True)
        self.expression(required=True)
        self.check_symbol(";", required=True)
        return MATCHED

    def if_statement(self, required: bool = False) -> bool:
        self._trace.push("<If> -> if ( <Condition> ) <Statement> <If Cont>")
        if not self.check_symbol("if", required):
            return FAILED
        self.check_symbol("(", required=True)
        self.condition(required=True)
        self.check_symbol(")", required=True)
        self.statement(required=True)
        self.if_cont(required=True)
        return MATCHED

    def if_cont(self, required: bool = False) -> bool:
        if self._try("<If Cont> -> else <Statement> fi", self._else_branch):
            return MATCHED
        if self._try("<If Cont> -> fi", partial(self.check_symbol, "fi")):
            return MATCHED
        return self._no_match(required, "<If Cont> -> else <Statement> fi | fi",
                              "expected 'fi' or 'else'")

    def _else_branch(self) -> bool:
        if not self.check_symbol("else"):
            return FAILED
        self.statement(required=True)
        self.check_symbol("fi", required=True)
        return MATCHED

    def return_statement(self, required: bool = False) -> bool:
        self._trace.push("<Return> -> return <Return Cont>")
        if not self.check_symbol("return", required):
            return FAILED
        self.return_cont(required=True)
        return MATCHED

    def return_cont(self, required: bool = False) -> bool:
        if self._try("<Return Cont> -> <Expression> ;", self._return_value):
            return MATCHED
        if self._try("<Return Cont> -> ;", partial(self.check_symbol, ";")):
            return MATCHED
        return self._no_match(required, "<Return Cont> -> <Expression> ; | ;",
                              "expected expression or ';'")

    def _return_value(self) -> bool:
        if not self.expression():
            return FAILED
        self.check_symbol(";", required=True)
        return MATCHED

    def print_statement(self, required: bool = False) -> bool:
        self._trace.push("<Print> -> put ( <Expression> ) ;")
        if not self.check_symbol("put", required):
            return FAILED
        self.check_symbol("(", required=True)
        self.expression(required=True)
        self.check_symbol(")", required=True)
        self.check_symbol(";", required=True)
        return MATCHED

    def scan_statement(self, required: bool = False) -> bool:
        self._trace.push("<Scan> -> get ( <IDs> ) ;")
        if not self.check_symbol("get", required):
            return FAILED
        self.check_symbol("(", required=True)
        self.ids(required=True)
        self.check_symbol(")", required=True)
        self.check_symbol(";", required=True)
        return MATCHED

    def while_statement(self, required: bool = False) -> bool:
        self._trace.push("<While> -> while ( <Condition> ) <Statement> endwhile")
        if not self.check_symbol("while", required):
            return FAILED
        self.check_symbol("(", required=True)
        self.condition(required=True)
        self.check_symbol(")", required=True)
        self.statement(required=True)
        self.check_symbol("endwhile", required=True)
        return MATCHED

    # ------------------------------------------------------------------
    # expressions
    # ------------------------------------------------------------------
    def condition(self, required: bool = False) -> bool:
        self._trace.push("<Condition> -> <Expression> <Relop> <Expression>")
        if not self.expression(required):
            return FAILED
        self.relop(required=True)
        self.expression(required=True)
        return MATCHED

    def relop(self, required: bool = False) -> bool:
        # `=>` is accepted as a relational operator, as in the language's token table
        for op in RELOPS:
            if self._try(f"<Relop> -> {op}", partial(self.check_symbol, op)):
                return MATCHED
        return self._no_match(required, "<Relop> -> == | != | > | < | <= | =>",
                              "expected relational operator")

    def expression(self, required: bool = False) -> bool:
        self._trace.push("<Expression> -> <Term> <Expression Cont>")
        if not self.term(required):
            return FAILED
        while (self._try("<Expression Cont> -> + <Term> <Expression Cont>",
                         partial(self._operator_then, "+", self.term))
               or self._try("<Expression Cont> -> - <Term> <Expression Cont>",
                            partial(self._operator_then, "-", self.term))):
            pass
        self._trace.push("<Expression Cont> -> <Empty>")
        return MATCHED

    def term(self, required: bool = False) -> bool:
        self._trace.push("<Term> -> <Factor> <Term Cont>")
        if not self.factor(required):
            return FAILED
        while (self._try("<Term Cont> -> * <Factor> <Term Cont>",
                         partial(self._operator_then, "*", self.factor))
               or self._try("<Term Cont> -> / <Factor> <Term Cont>",
                            partial(self._operator_then, "/", self.factor))):
            pass
        self._trace.push("<Term Cont> -> <Empty>")
        return MATCHED

    def factor(self, required: bool = False) -> bool:
        if self._try("<Factor> -> - <Primary>", partial(self._operator_then, "-", self.primary)):
            return MATCHED
        if self._try("<Factor> -> <Primary>", self.primary):
            return MATCHED
        return self._no_match(required, "<Factor> -> - <Primary> | <Primary>",
                              _PRIMARY_EXPECTED)

    def primary(self, required: bool = False) -> bool:
        alternatives = (
            ("<Primary> -> <Identifier> <Primary Cont>", self._primary_identifier),
            ("<Primary> -> <Integer>", partial(self.check_symbol, INTEGER)),
            ("<Primary> -> <Real>", partial(self.check_symbol, REAL)),
            ("<Primary> -> ( <Expression> )", self._primary_group),
            ("<Primary> -> true", partial(self.check_symbol, "true")),
            ("<Primary> -> false", partial(self.check_symbol, "false")),
        )
        for label, attempt in alternatives:
            if self._try(label, attempt):
                return MATCHED
        return self._no_match(
            required,
            "<Primary> -> <Identifier> <Primary Cont> | <Integer> | <Real>"
            " | ( <Expression> ) | true | false",
            _PRIMARY_EXPECTED,
        )

    def _primary_identifier(self) -> bool:
        if not self.check_symbol(IDENTIFIER):
            return FAILED
        self.primary_cont()
        return MATCHED

    def primary_cont(self) -> bool:
        if self._try("<Primary Cont> -> ( <IDs> )", self._call_arguments):
            return MATCHED
        self._trace.push("<Primary Cont> -> <Empty>")
        return MATCHED

    def _call_arguments(self) -> bool:
        if not self.check_symbol("("):
            return FAILED
        self.ids(required=True)
        self.check_symbol(")", required=True)
        return MATCHED

    def _primary_group(self) -> bool:
        if not self.check_symbol("("):
            return FAILED
        self.expression(required=True)
        self.check_symbol(")", required=True)
        return MATCHED
