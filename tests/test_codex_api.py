import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from zcf.codex.api import configure_codex_api, env_key_for, sanitize_provider_name
from zcf.codex.config_file import read_codex_config, write_auth_file, write_codex_config
from zcf.codex.model import CodexConfig, CodexMcpService, CodexProvider
from zcf.i18n import init_i18n


class ScriptedUI:
    """Answers each prompt kind from its own queue, in call order."""

    def __init__(self, select=(), text=(), secret=(), confirm=()):
        self.answers = {
            "select": list(select),
            "text": list(text),
            "secret": list(secret),
            "confirm": list(confirm),
        }
        self.calls = []
        self.messages = []
        self.successes = []

    def _answer(self, kind, message):
        self.calls.append((kind, message))
        return self.answers[kind].pop(0)

    def select(self, message, choices, **kwargs):
        return self._answer("select", message)

    def text(self, message, **kwargs):
        return self._answer("text", message)

    def secret(self, message, **kwargs):
        return self._answer("secret", message)

    def confirm(self, message, **kwargs):
        return self._answer("confirm", message)

    def display_message(self, content, **kwargs):
        self.messages.append(content)

    def display_success(self, content, **kwargs):
        self.successes.append(content)


class ProviderNameTests(unittest.TestCase):
    def test_sanitize_provider_name(self):
        self.assertEqual(sanitize_provider_name(" packy code! "), "packycode")
        self.assertEqual(sanitize_provider_name("my-api.v2"), "my-api.v2")

    def test_env_key_for(self):
        self.assertEqual(env_key_for("packy"), "PACKY_API_KEY")
        self.assertEqual(env_key_for("my-api"), "MY_API_API_KEY")


class ConfigureCodexApiTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)
        home_patch = patch.object(Path, "home", return_value=self.home)
        home_patch.start()
        self.addCleanup(home_patch.stop)
        self.addCleanup(self._tmp.cleanup)
        init_i18n("en")

    def _auth(self):
        return json.loads((self.home / ".codex" / "auth.json").read_text(encoding="utf-8"))

    def test_custom_providers_are_written_with_chosen_default(self):
        ui = ScriptedUI(
            select=["custom", "chat", "responses", "other"],
            text=["packy", "https://packy/v1", "other", "https://other/v1"],
            secret=["key-1", "key-2"],
            confirm=[True, False],
        )

        configure_codex_api(ui)

        config = read_codex_config()
        self.assertTrue(config.managed)
        self.assertEqual(config.model_provider, "other")
        self.assertEqual([p.id for p in config.providers], ["packy", "other"])
        self.assertEqual(config.providers[0].wire_api, "chat")
        self.assertEqual(config.providers[0].env_key, "PACKY_API_KEY")
        self.assertEqual(self._auth(), {"PACKY_API_KEY": "key-1", "OTHER_API_KEY": "key-2"})
        self.assertEqual(len(ui.successes), 1)

    def test_same_name_twice_overwrites_session_entry_when_confirmed(self):
        ui = ScriptedUI(
            select=["custom", "responses", "chat", "packy"],
            text=["packy", "https://first", "packy", "https://second"],
            secret=["k1", "k2"],
            confirm=[True, True, False],
        )

        configure_codex_api(ui)

        config = read_codex_config()
        self.assertEqual(len(config.providers), 1)
        self.assertEqual(config.providers[0].base_url, "https://second")
        self.assertEqual(config.providers[0].wire_api, "chat")
        self.assertEqual(self._auth(), {"PACKY_API_KEY": "k2"})

    def test_duplicate_prompt_names_existing_entry_before_session_entry(self):
        write_codex_config(
            CodexConfig(
                model_provider="packy",
                providers=[CodexProvider(id="packy", name="Packy Prod", base_url="https://prod")],
            )
        )
        ui = ScriptedUI(
            select=["custom", "responses", "chat", "responses", "packy"],
            text=["packy", "https://one", "packy", "https://two", "other", "https://three"],
            secret=["k1", "k2", "k3"],
            confirm=[True, True, False, False],
        )

        configure_codex_api(ui)

        duplicate_prompts = [message for kind, message in ui.calls if kind == "confirm"][::2]
        self.assertEqual(len(duplicate_prompts), 2)
        for message in duplicate_prompts:
            self.assertIn("Packy Prod", message)
            self.assertIn("the existing configuration", message)
        config = read_codex_config()
        self.assertEqual([p.id for p in config.providers], ["packy", "other"])
        self.assertEqual(config.get_provider("packy").base_url, "https://one")

    def test_custom_flow_keeps_mcp_servers_and_other_tables(self):
        write_codex_config(
            CodexConfig(
                model_provider="old",
                providers=[CodexProvider(id="old", name="Old", base_url="https://old")],
                mcp_services=[CodexMcpService(id="ctx", command="npx", args=["-y", "ctx"])],
                other_config=['[projects."/w"]', 'trust_level = "trusted"'],
            )
        )
        ui = ScriptedUI(
            select=["custom", "responses", "new"],
            text=["new", "https://new"],
            secret=["k"],
            confirm=[False],
        )

        configure_codex_api(ui)

        config = read_codex_config()
        self.assertEqual([p.id for p in config.providers], ["new"])
        self.assertEqual(config.model_provider, "new")
        self.assertEqual([s.id for s in config.mcp_services], ["ctx"])
        self.assertEqual(config.other_config, ['[projects."/w"]', 'trust_level = "trusted"'])

    def test_official_mode_drops_providers_and_openai_key(self):
        write_codex_config(
            CodexConfig(
                model_provider="a",
                providers=[CodexProvider(id="a", name="A", base_url="https://a")],
                mcp_services=[CodexMcpService(id="ctx", command="npx")],
            )
        )
        write_auth_file({"OPENAI_API_KEY": "sk-1", "A_API_KEY": "a"})
        ui = ScriptedUI(select=["official"])

        configure_codex_api(ui)

        config = read_codex_config()
        self.assertIsNone(config.model_provider)
        self.assertEqual(config.providers, [])
        self.assertEqual([s.id for s in config.mcp_services], ["ctx"])
        self.assertEqual(self._auth(), {"A_API_KEY": "a"})
        self.assertTrue(any(message.startswith("Backup created at") for message in ui.messages))

    def test_cancelled_mode_selection_writes_nothing(self):
        ui = ScriptedUI(select=[None])

        configure_codex_api(ui)

        self.assertIsNone(read_codex_config())
        self.assertEqual(ui.messages, ["Operation cancelled"])


if __name__ == "__main__":
    unittest.main()
