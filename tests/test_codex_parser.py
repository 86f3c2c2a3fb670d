import unittest

from zcf.codex.model import CodexConfig
from zcf.codex.parser import TOMLDecodeError, parse_codex_config
from zcf.constants import ZCF_MARKER


class ParseCodexConfigTests(unittest.TestCase):
    def test_empty_input_yields_zero_value(self):
        config = parse_codex_config("")

        self.assertEqual(config, CodexConfig())
        self.assertIsNone(config.model)
        self.assertIsNone(config.model_provider)
        self.assertIsNone(config.model_provider_commented)
        self.assertEqual(config.providers, [])
        self.assertEqual(config.mcp_services, [])
        self.assertFalse(config.managed)
        self.assertEqual(config.other_config, [])

    def test_reads_global_directives_and_provider_fields(self):
        text = "\n".join(
            [
                ZCF_MARKER,
                'model_provider = "packy"',
                'model = "gpt-5"',
                "",
                "[model_providers.packy]",
                'name = "Packy"',
                'base_url = "https://api.packy.dev/v1"',
                'wire_api = "chat"',
                'env_key = "PACKY_API_KEY"',
                "requires_openai_auth = true",
            ]
        )

        config = parse_codex_config(text)

        self.assertTrue(config.managed)
        self.assertEqual(config.model, "gpt-5")
        self.assertEqual(config.model_provider, "packy")
        self.assertIsNone(config.model_provider_commented)
        self.assertEqual(len(config.providers), 1)
        provider = config.providers[0]
        self.assertEqual(provider.id, "packy")
        self.assertEqual(provider.name, "Packy")
        self.assertEqual(provider.base_url, "https://api.packy.dev/v1")
        self.assertEqual(provider.wire_api, "chat")
        self.assertEqual(provider.env_key, "PACKY_API_KEY")
        self.assertTrue(provider.requires_openai_auth)
        self.assertEqual(config.other_config, [])

    def test_missing_provider_fields_fall_back_to_defaults(self):
        config = parse_codex_config("[model_providers.bare]\n")

        provider = config.providers[0]
        self.assertEqual(provider.name, "bare")
        self.assertEqual(provider.base_url, "")
        self.assertEqual(provider.wire_api, "responses")
        self.assertEqual(provider.env_key, "OPENAI_API_KEY")
        self.assertIsNone(provider.requires_openai_auth)

    def test_commented_provider_is_recorded_as_commented(self):
        text = "\n".join(
            [
                '# model_provider = "claude"',
                "",
                "[model_providers.claude]",
                'name = "Claude"',
                'base_url = "https://example.com"',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual(config.model_provider, "claude")
        self.assertTrue(config.model_provider_commented)
        self.assertEqual(config.other_config, [])

    def test_live_provider_wins_over_commented_one(self):
        text = '# model_provider = "old"\nmodel_provider = "new"\n'

        config = parse_codex_config(text)

        self.assertEqual(config.model_provider, "new")
        self.assertIsNone(config.model_provider_commented)

    def test_mixed_config_lifts_detached_directive_out_of_projects_table(self):
        text = "\n".join(
            [
                '[projects."/a"]',
                'trust_level = "trusted"',
                "",
                'model_provider = "gpt4"',
                "",
                "[model_providers.gpt4]",
                'name = "GPT-4"',
                'base_url = "https://api.openai.com/v1"',
                'wire_api = "responses"',
                "",
                "[mcp_servers.ctx]",
                'command = "npx"',
                'args = ["-y","ctx"]',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual(config.model_provider, "gpt4")
        self.assertEqual([p.id for p in config.providers], ["gpt4"])
        self.assertEqual(config.mcp_services[0].command, "npx")
        self.assertEqual(config.mcp_services[0].args, ["-y", "ctx"])
        self.assertEqual(config.other_config, ['[projects."/a"]', 'trust_level = "trusted"'])

    def test_provider_directive_inside_table_is_not_global(self):
        text = "\n".join(
            [
                '[projects."/a"]',
                'trust_level = "trusted"',
                'model_provider = "nested"',
                "",
                "[profiles.fast]",
                "",
                'model_provider = "profile-only"',
            ]
        )

        config = parse_codex_config(text)

        self.assertIsNone(config.model_provider)
        self.assertIn('model_provider = "nested"', config.other_config)
        self.assertIn('model_provider = "profile-only"', config.other_config)

    def test_root_directive_keeps_detached_table_line_in_place(self):
        text = "\n".join(
            [
                'model_provider = "root"',
                "",
                '[projects."/a"]',
                'trust_level = "trusted"',
                "",
                'model_provider = "detached"',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual(config.model_provider, "root")
        self.assertIn('model_provider = "detached"', config.other_config)

    def test_duplicate_provider_tables_last_definition_wins(self):
        text = "\n".join(
            [
                "[model_providers.a]",
                'name = "First"',
                'base_url = "https://one"',
                "",
                "[model_providers.b]",
                'name = "B"',
                "",
                "[model_providers.a]",
                'name = "Second"',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual([p.id for p in config.providers], ["a", "b"])
        self.assertEqual(config.providers[0].name, "Second")
        self.assertEqual(config.providers[0].base_url, "")

    def test_mcp_env_sub_table_and_inline_env(self):
        text = "\n".join(
            [
                "[mcp_servers.exa]",
                'command = "npx"',
                'args = ["-y", "exa-mcp-server"]',
                "startup_timeout_ms = 20000",
                "",
                "[mcp_servers.exa.env]",
                'EXA_API_KEY = "secret"',
                "",
                "[mcp_servers.search]",
                'command = "uvx"',
                'env = { MODE = "stdio" }',
            ]
        )

        config = parse_codex_config(text)

        exa = config.get_mcp_service("exa")
        self.assertEqual(exa.env, {"EXA_API_KEY": "secret"})
        self.assertEqual(exa.startup_timeout_ms, 20000)
        search = config.get_mcp_service("search")
        self.assertEqual(search.command, "uvx")
        self.assertIsNone(search.args)
        self.assertEqual(search.env, {"MODE": "stdio"})
        self.assertIsNone(search.startup_timeout_ms)

    def test_bare_model_providers_table_with_inline_entries(self):
        text = '[model_providers]\nlocal = { name = "Local", base_url = "http://localhost:8080" }\n'

        config = parse_codex_config(text)

        self.assertEqual(config.providers[0].id, "local")
        self.assertEqual(config.providers[0].base_url, "http://localhost:8080")

    def test_unknown_provider_keys_are_kept_as_extra(self):
        text = "\n".join(
            [
                "[model_providers.azure]",
                'name = "Azure"',
                'base_url = "https://azure"',
                'query_params = { api-version = "2025-04-01" }',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual(config.providers[0].extra, {"query_params": {"api-version": "2025-04-01"}})

    def test_other_config_keeps_root_lines_before_tables(self):
        text = "\n".join(
            [
                "# user notes",
                'approval_policy = "never"',
                "",
                "",
                '[projects."/b"]',
                'trust_level = "untrusted"',
                "",
                "[[profiles.list]]",
                'name = "x"',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual(
            config.other_config,
            [
                "# user notes",
                'approval_policy = "never"',
                "",
                '[projects."/b"]',
                'trust_level = "untrusted"',
                "",
                "[[profiles.list]]",
                'name = "x"',
            ],
        )

    def test_multiline_array_lines_are_not_headers(self):
        text = "\n".join(
            [
                "[tools]",
                "allowed = [",
                '  ["a"],',
                '  ["b"]',
                "]",
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual(config.other_config, text.splitlines())

    def test_marker_comments_are_dropped_from_other_config(self):
        text = f"{ZCF_MARKER}\n# --- MCP servers added by ZCF ---\nhide_agent_reasoning = true\n"

        config = parse_codex_config(text)

        self.assertTrue(config.managed)
        self.assertEqual(config.other_config, ["hide_agent_reasoning = true"])

    def test_mixed_type_arrays_are_accepted(self):
        text = "\n".join(
            [
                'model_provider = "a"',
                "",
                "[model_providers.a]",
                'name = "A"',
                'base_url = "https://a"',
                "",
                "[mcp_servers.s]",
                'command = "serve"',
                'args = ["--port", 8080, true]',
                "",
                "[tui]",
                'notifications = ["agent-turn-complete", true]',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual(config.model_provider, "a")
        self.assertEqual(config.get_mcp_service("s").args, ["--port", 8080, True])
        self.assertEqual(config.other_config, ["[tui]", 'notifications = ["agent-turn-complete", true]'])

    def test_unexpected_value_types_are_kept_as_extra(self):
        text = "\n".join(
            [
                "[model_providers.p]",
                "name = 7",
                'base_url = "https://p"',
                'requires_openai_auth = "true"',
                "",
                "[mcp_servers.m]",
                'command = "x"',
                'args = "--single"',
                "startup_timeout_ms = 1500.5",
            ]
        )

        config = parse_codex_config(text)

        provider = config.providers[0]
        self.assertEqual(provider.name, "p")
        self.assertIsNone(provider.requires_openai_auth)
        self.assertEqual(provider.extra, {"name": 7, "requires_openai_auth": "true"})
        service = config.mcp_services[0]
        self.assertIsNone(service.args)
        self.assertIsNone(service.startup_timeout_ms)
        self.assertEqual(service.extra, {"args": "--single", "startup_timeout_ms": 1500.5})

    def test_non_table_entries_of_bare_provider_table_are_preserved(self):
        text = '[model_providers]\nfoo = 1\nlocal = { name = "Local", base_url = "http://localhost" }\n'

        config = parse_codex_config(text)

        self.assertEqual([p.id for p in config.providers], ["local"])
        self.assertEqual(config.other_config, ["[model_providers]", "foo = 1"])

    def test_dotted_root_keys_are_modelled_as_tables(self):
        text = "\n".join(
            [
                'model_provider = "x"',
                'model_providers.x.name = "X"',
                'model_providers.x.base_url = "https://x.example.com/v1"',
                "model_providers.limit = 3",
                'mcp_servers.ctx = { command = "npx", args = ["-y", "ctx"] }',
                'approval_policy = "never"',
            ]
        )

        config = parse_codex_config(text)

        self.assertEqual([p.id for p in config.providers], ["x"])
        self.assertEqual(config.providers[0].name, "X")
        self.assertEqual(config.providers[0].base_url, "https://x.example.com/v1")
        self.assertEqual(config.mcp_services[0].args, ["-y", "ctx"])
        self.assertEqual(config.other_config, ['approval_policy = "never"', "model_providers.limit = 3"])

    def test_invalid_toml_raises_decode_error(self):
        with self.assertRaises(TOMLDecodeError):
            parse_codex_config("this is not toml\n")


if __name__ == "__main__":
    unittest.main()
