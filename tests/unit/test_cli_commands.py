"""Flask CLI command tests."""


class TestCliCommands:

    def test_schema_flags(self, app):
        result = app.test_cli_runner().invoke(args=['schema-flags'])
        assert result.exit_code == 0
        assert 'has_payment_terms: yes' in result.output
        assert 'has_order_type: yes' in result.output

    def test_next_order_number(self, app, session, add_order):
        add_order('ORD-0041')
        result = app.test_cli_runner().invoke(args=['next-order-number'])

        assert result.exit_code == 0
        assert 'ORD-0042' in result.output
        assert 'strategy: max_scan' in result.output

    def test_init_db_is_idempotent(self, app):
        result = app.test_cli_runner().invoke(args=['init-db'])
        assert result.exit_code == 0
        assert 'Tables created.' in result.output
