from stencil.expression.scanner import ExpressionScanner


class TestExpressionScanner:

    def test_peek_does_not_move_cursor(self):
        scanner = ExpressionScanner("  foo == 1")
        assert scanner.peek() == "foo"
        assert scanner.peek() == "foo"
        assert scanner.cursor == 0

    def test_peek_with_whitespace(self):
        scanner = ExpressionScanner("  foo  == 1")
        assert scanner.peek(include_whitespace=True) == "  foo  "

    def test_consume_advances_past_token(self):
        scanner = ExpressionScanner("foo == 1")
        scanner.consume(scanner.peek())
        assert scanner.peek() == "=="
        scanner.consume("==")
        assert scanner.peek() == "1"

    def test_cursor_strictly_advances(self):
        """Каждое потребление непустого токена сдвигает курсор вперёд"""
        scanner = ExpressionScanner("!(a && 'b c') || {d} !== 2 % x")
        positions = [scanner.cursor]
        while True:
            token = scanner.peek()
            if not token:
                break
            scanner.consume(token)
            assert scanner.cursor > positions[-1]
            positions.append(scanner.cursor)
        assert scanner.at_end()

    def test_comparators_are_single_tokens(self):
        for comparator in ("===", "==", "!==", "!=", "<=", ">=", "<", ">", "%", "&&", "||"):
            assert ExpressionScanner(f"{comparator} x").peek() == comparator

    def test_escaped_quote_is_a_token(self):
        assert ExpressionScanner("\\' rest").peek() == "\\'"

    def test_empty_at_end(self):
        scanner = ExpressionScanner("   ")
        assert scanner.peek() == ""
        scanner.consume("")
        assert scanner.cursor == 0
