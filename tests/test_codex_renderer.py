import re
import unittest

from zcf.codex.model import CodexConfig, CodexMcpService, CodexProvider
from zcf.codex.parser import parse_codex_config
from zcf.codex.renderer import quote, render_codex_config
from zcf.constants import ZCF_MARKER

MIXED_CONFIG = """[projects."/a"]
trust_level = "trusted"

model_provider = "gpt4"

[model_providers.gpt4]
name = "GPT-4"
base_url = "https://api.openai.com/v1"
wire_api = "responses"

[mcp_servers.ctx]
command = "npx"
args = ["-y","ctx"]
"""


def _first_header_index(lines):
    return next(index for index, line in enumerate(lines) if line.startswith("["))


class RenderCodexConfigTests(unittest.TestCase):
    def test_empty_model_renders_empty_text(self):
        self.assertEqual(render_codex_config(CodexConfig()), "")

    def test_canonical_order_and_single_trailing_newline(self):
        config = CodexConfig(
            model="gpt-5",
            model_provider="packy",
            managed=True,
            providers=[CodexProvider(id="packy", name="Packy", base_url="https://packy", env_key="PACKY_API_KEY")],
            mcp_services=[CodexMcpService(id="ctx", command="npx", args=["-y", "ctx"], env={"A": "1"})],
            other_config=['approval_policy = "never"', "", '[projects."/p"]', 'trust_level = "trusted"'],
        )

        text = render_codex_config(config)

        self.assertEqual(
            text,
            "\n".join(
                [
                    ZCF_MARKER,
                    'model_provider = "packy"',
                    'model = "gpt-5"',
                    "",
                    'approval_policy = "never"',
                    "",
                    "[model_providers.packy]",
                    'name = "Packy"',
                    'base_url = "https://packy"',
                    'wire_api = "responses"',
                    'env_key = "PACKY_API_KEY"',
                    "",
                    "[mcp_servers.ctx]",
                    'command = "npx"',
                    'args = ["-y", "ctx"]',
                    'env = { A = "1" }',
                    "",
                    '[projects."/p"]',
                    'trust_level = "trusted"',
                ]
            )
            + "\n",
        )

    def test_model_provider_precedes_every_table_header(self):
        config = parse_codex_config(MIXED_CONFIG)

        lines = render_codex_config(config).splitlines()

        provider_line = lines.index('model_provider = "gpt4"')
        self.assertLess(provider_line, _first_header_index(lines))

    def test_mixed_config_round_trip_keeps_projects_block(self):
        config = parse_codex_config(MIXED_CONFIG)

        text = render_codex_config(config)
        reparsed = parse_codex_config(text)

        self.assertIn('[projects."/a"]\ntrust_level = "trusted"\n', text)
        self.assertEqual(reparsed.model_provider, "gpt4")
        self.assertEqual(reparsed.providers, config.providers)
        self.assertEqual(reparsed.mcp_services, config.mcp_services)
        self.assertEqual(reparsed.other_config, config.other_config)

    def test_commented_provider_is_re_emitted_as_comment(self):
        config = parse_codex_config(
            '# model_provider = "claude"\n\n[model_providers.claude]\nname = "Claude"\nbase_url = "https://c"\n'
        )

        text = render_codex_config(config)
        reparsed = parse_codex_config(text)

        self.assertTrue(text.startswith('# model_provider = "claude"\n'))
        self.assertIsNone(re.search(r"^model_provider", text, re.MULTILINE))
        self.assertEqual(reparsed.model_provider, "claude")
        self.assertTrue(reparsed.model_provider_commented)

    def test_round_trip_preserves_structured_fields(self):
        source = "\n".join(
            [
                ZCF_MARKER,
                'model_provider = "b"',
                "",
                "[model_providers.a]",
                'name = "A \\"quoted\\""',
                'base_url = "https://a"',
                'wire_api = "chat"',
                'env_key = "A_API_KEY"',
                "requires_openai_auth = false",
                'http_headers = { X-Team = "core" }',
                "",
                "[model_providers.b]",
                'name = "B"',
                'base_url = "https://b"',
                "",
                "[mcp_servers.spec-workflow]",
                'command = "npx"',
                'args = ["-y", "@pimzino/spec-workflow-mcp@latest"]',
                "startup_timeout_ms = 60000",
                "",
                "[mcp_servers.exa.env]",
                'EXA_API_KEY = "k"',
            ]
        )
        config = parse_codex_config(source)

        reparsed = parse_codex_config(render_codex_config(config))

        self.assertEqual(reparsed.model_provider, "b")
        self.assertEqual(reparsed.providers, config.providers)
        self.assertEqual(reparsed.mcp_services, config.mcp_services)
        self.assertTrue(reparsed.managed)
        self.assertEqual(config.providers[0].name, 'A "quoted"')
        self.assertEqual(config.mcp_services[0].id, "spec-workflow")

    def test_values_of_unexpected_type_survive_a_rewrite(self):
        source = "\n".join(
            [
                "[model_providers]",
                "foo = 1",
                "",
                "[model_providers.p]",
                "name = 7",
                'base_url = "https://p"',
                "",
                "[mcp_servers.a]",
                'command = "x"',
                'args = ["--port", 8080]',
                "startup_timeout_ms = 1500.5",
            ]
        )

        text = render_codex_config(parse_codex_config(source))
        reparsed = parse_codex_config(text)

        self.assertIn("startup_timeout_ms = 1500.5", text)
        self.assertIn('args = ["--port", 8080]', text)
        self.assertIn("name = 7", text)
        self.assertNotIn('name = "p"', text)
        self.assertIn("[model_providers]\nfoo = 1", text)
        self.assertEqual(reparsed.mcp_services[0].extra, {"startup_timeout_ms": 1500.5})
        self.assertEqual(reparsed.providers[0].extra, {"name": 7})

    def test_rendering_is_deterministic(self):
        config = parse_codex_config(MIXED_CONFIG)

        self.assertEqual(render_codex_config(config), render_codex_config(config))

    def test_quote_escapes_control_characters(self):
        self.assertEqual(quote('a"b\\c\nd'), '"a\\"b\\\\c\\nd"')
        self.assertEqual(quote("\x01"), '"\\u0001"')


if __name__ == "__main__":
    unittest.main()
