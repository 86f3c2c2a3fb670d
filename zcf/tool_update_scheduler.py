from .auto_updater import check_and_update_tools
from .codex.installer import run_codex_update


class ToolUpdateScheduler:
    """Routes an update request to the tools of one code tool type."""

    def __init__(self, ui):
        self.ui = ui

    def update_by_code_type(self, code_type: str, skip_prompt: bool = False) -> None:
        if code_type == "claude-code":
            check_and_update_tools(self.ui, skip_prompt=skip_prompt)
        elif code_type == "codex":
            run_codex_update(self.ui, skip_prompt=skip_prompt)
        else:
            raise ValueError(f"Unsupported code type: {code_type}")
