from typing import Dict

from .constants import SUPPORTED_LANGS

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "common.cancelled": "Operation cancelled",
        "common.back": "Back",
        "common.backupCreated": "Backup created: {path}",
        "common.goodbye": "Goodbye!",
        "common.invalidChoice": "Invalid choice",
        "codex.backupSuccess": "Backup created at {path}",
        "codex.installingCli": "Installing Codex CLI...",
        "codex.updatingCli": "Updating Codex CLI...",
        "codex.installSuccess": "Codex CLI installed",
        "codex.updateSuccess": "Codex CLI updated",
        "codex.alreadyInstalled": "Codex CLI is already up to date",
        "codex.apiModePrompt": "Select API configuration mode",
        "codex.apiModeOfficial": "Use official login (no custom provider)",
        "codex.apiModeCustom": "Configure custom API providers",
        "codex.officialConfigured": "Switched to official OpenAI login",
        "codex.apiConfigured": "Codex API providers configured",
        "codex.providerNamePrompt": "Provider name",
        "codex.providerNameRequired": "Provider name is required",
        "codex.providerNameInvalid": "Only letters, digits, '.', '_' and '-' are allowed",
        "codex.providerBaseUrlPrompt": "API base URL",
        "codex.providerBaseUrlRequired": "Base URL is required",
        "codex.providerProtocolPrompt": "Wire protocol",
        "codex.protocolResponses": "Responses API",
        "codex.protocolChat": "Chat Completions API",
        "codex.providerApiKeyPrompt": "API key",
        "codex.providerApiKeyRequired": "API key is required",
        "codex.providerDuplicatePrompt": "Provider '{name}' already exists in {source}. Overwrite?",
        "codex.providerDuplicateSkipped": "Skipped duplicate provider",
        "codex.existingConfig": "the existing configuration",
        "codex.currentSession": "this session",
        "codex.addProviderPrompt": "Add another provider?",
        "codex.noProvidersConfigured": "No providers configured",
        "codex.selectDefaultProviderPrompt": "Select the default provider",
        "codex.mcpConfigured": "Codex MCP services configured",
        "codex.noMcpConfigured": "No MCP services selected, existing services kept",
        "codex.noExistingProviders": "No existing providers found, run API configuration first",
        "codex.incrementalManagementTitle": "Manage Codex providers",
        "codex.currentProviderCount": "Configured providers: {count}",
        "codex.currentDefaultProvider": "Current default provider: {provider}",
        "codex.unmanagedWarning": "config.toml was not written by ZCF, the whole directory will be backed up first",
        "codex.selectAction": "Select an action",
        "codex.addProvider": "Add provider",
        "codex.editProvider": "Edit provider",
        "codex.deleteProvider": "Delete providers",
        "codex.switchProvider": "Switch default provider",
        "codex.selectProviderToEdit": "Select a provider to edit",
        "codex.selectProvidersToDelete": "Select providers to delete",
        "codex.selectProviderToSwitch": "Select the new default provider",
        "codex.selectAtLeastOne": "Select at least one provider",
        "codex.confirmDeleteProviders": "Delete {providers}?",
        "codex.providerAdded": "Provider '{name}' added",
        "codex.providerAddFailed": "Failed to add provider: {error}",
        "codex.providerUpdated": "Provider '{name}' updated",
        "codex.providerUpdateFailed": "Failed to update provider: {error}",
        "codex.providersDeleted": "Deleted {count} provider(s)",
        "codex.providersDeleteFailed": "Failed to delete providers: {error}",
        "codex.newDefaultProvider": "New default provider: {provider}",
        "codex.defaultProviderCleared": "No providers remain, default provider cleared",
        "codex.providerSwitched": "Default provider switched to '{provider}'",
        "codex.providerSwitchFailed": "Failed to switch provider: {error}",
        "codex.providerNotFound": "Provider not found",
        "codex.configError": "Cannot read Codex config: {error}",
        "codex.noBackupNeeded": "Nothing to back up, {path} does not exist",
        "codex.uninstallPrompt": "Select items to remove",
        "codex.uninstallItemApiConfig": "API provider configuration",
        "codex.uninstallItemMcpConfig": "MCP server configuration",
        "codex.uninstallItemConfig": "config.toml",
        "codex.uninstallItemAuth": "auth.json",
        "codex.uninstallItemBackups": "Backups",
        "codex.removedItem": "Removed {item}",
        "codex.removedConfig": "Removed {config}",
        "codex.configNotFound": "config.toml not found",
        "codex.authNotFound": "auth.json not found",
        "codex.backupsNotFound": "No backups found",
        "mcp.selectMcpServices": "Select MCP services",
        "mcp.apiKeyPrompt": "API key for {service}",
        "mcp.services.context7.name": "Context7",
        "mcp.services.context7.description": "Up-to-date library documentation",
        "mcp.services.open-websearch.name": "Open Web Search",
        "mcp.services.open-websearch.description": "Web search via DuckDuckGo, Bing and Brave",
        "mcp.services.spec-workflow.name": "Spec Workflow",
        "mcp.services.spec-workflow.description": "Spec-driven development workflow",
        "mcp.services.mcp-deepwiki.name": "DeepWiki",
        "mcp.services.mcp-deepwiki.description": "GitHub repository documentation",
        "mcp.services.Playwright.name": "Playwright",
        "mcp.services.Playwright.description": "Browser automation",
        "mcp.services.exa.name": "Exa Search",
        "mcp.services.exa.description": "Exa AI web search",
        "mcp.services.exa.apiKeyPrompt": "Exa API key",
        "updater.checkingTools": "Checking tool versions",
        "updater.checkingVersion": "Checking {tool} version...",
        "updater.notInstalled": "{tool} is not installed",
        "updater.upToDate": "{tool} is up to date ({version})",
        "updater.cannotCheckVersion": "Cannot determine the latest {tool} version",
        "updater.currentVersion": "Current version: {version}",
        "updater.latestVersion": "Latest version: {version}",
        "updater.confirmUpdate": "Update {tool} now?",
        "updater.updateSkipped": "Update skipped",
        "updater.updating": "Updating {tool}...",
        "updater.updateSuccess": "{tool} updated",
        "updater.updateFailed": "{tool} update failed",
        "updater.summary": "Update summary",
        "menu.title": "ZCF - Zero-Config Code Flow",
        "menu.selectAction": "Select an action",
        "menu.codexApi": "Configure Codex API providers",
        "menu.codexMcp": "Configure Codex MCP services",
        "menu.codexProviders": "Manage Codex providers",
        "menu.codexBackup": "Back up Codex configuration",
        "menu.codexUpdate": "Install or update Codex CLI",
        "menu.codexUninstall": "Remove Codex configuration",
        "menu.checkUpdates": "Check Claude Code / CCR / CCometixLine updates",
        "menu.exit": "Exit",
    },
    "zh-CN": {
        "common.cancelled": "操作已取消",
        "common.back": "返回",
        "common.backupCreated": "已创建备份：{path}",
        "common.goodbye": "再见！",
        "common.invalidChoice": "无效选择",
        "codex.backupSuccess": "已备份到 {path}",
        "codex.installingCli": "正在安装 Codex CLI...",
        "codex.updatingCli": "正在更新 Codex CLI...",
        "codex.installSuccess": "Codex CLI 安装完成",
        "codex.updateSuccess": "Codex CLI 更新完成",
        "codex.alreadyInstalled": "Codex CLI 已是最新版本",
        "codex.apiModePrompt": "选择 API 配置模式",
        "codex.apiModeOfficial": "使用官方登录（不配置自定义提供商）",
        "codex.apiModeCustom": "配置自定义 API 提供商",
        "codex.officialConfigured": "已切换为官方登录",
        "codex.apiConfigured": "Codex API 提供商配置完成",
        "codex.providerNamePrompt": "提供商名称",
        "codex.providerNameRequired": "提供商名称不能为空",
        "codex.providerNameInvalid": "只允许字母、数字、'.'、'_' 和 '-'",
        "codex.providerBaseUrlPrompt": "API 地址",
        "codex.providerBaseUrlRequired": "API 地址不能为空",
        "codex.providerProtocolPrompt": "协议类型",
        "codex.protocolResponses": "Responses API",
        "codex.protocolChat": "Chat Completions API",
        "codex.providerApiKeyPrompt": "API 密钥",
        "codex.providerApiKeyRequired": "API 密钥不能为空",
        "codex.providerDuplicatePrompt": "提供商 '{name}' 已存在于{source}，是否覆盖？",
        "codex.providerDuplicateSkipped": "已跳过重复的提供商",
        "codex.existingConfig": "现有配置",
        "codex.currentSession": "本次会话",
        "codex.addProviderPrompt": "是否继续添加提供商？",
        "codex.noProvidersConfigured": "未配置任何提供商",
        "codex.selectDefaultProviderPrompt": "选择默认提供商",
        "codex.mcpConfigured": "Codex MCP 服务配置完成",
        "codex.noMcpConfigured": "未选择 MCP 服务，保留现有服务",
        "codex.noExistingProviders": "未找到现有提供商，请先进行 API 配置",
        "codex.incrementalManagementTitle": "管理 Codex 提供商",
        "codex.currentProviderCount": "已配置提供商：{count}",
        "codex.currentDefaultProvider": "当前默认提供商：{provider}",
        "codex.unmanagedWarning": "config.toml 并非由 ZCF 生成，将先备份整个目录",
        "codex.selectAction": "选择操作",
        "codex.addProvider": "添加提供商",
        "codex.editProvider": "编辑提供商",
        "codex.deleteProvider": "删除提供商",
        "codex.switchProvider": "切换默认提供商",
        "codex.selectProviderToEdit": "选择要编辑的提供商",
        "codex.selectProvidersToDelete": "选择要删除的提供商",
        "codex.selectProviderToSwitch": "选择新的默认提供商",
        "codex.selectAtLeastOne": "请至少选择一个提供商",
        "codex.confirmDeleteProviders": "确认删除 {providers}？",
        "codex.providerAdded": "已添加提供商 '{name}'",
        "codex.providerAddFailed": "添加提供商失败：{error}",
        "codex.providerUpdated": "已更新提供商 '{name}'",
        "codex.providerUpdateFailed": "更新提供商失败：{error}",
        "codex.providersDeleted": "已删除 {count} 个提供商",
        "codex.providersDeleteFailed": "删除提供商失败：{error}",
        "codex.newDefaultProvider": "新的默认提供商：{provider}",
        "codex.defaultProviderCleared": "已无剩余提供商，默认提供商已清除",
        "codex.providerSwitched": "默认提供商已切换为 '{provider}'",
        "codex.providerSwitchFailed": "切换提供商失败：{error}",
        "codex.providerNotFound": "未找到提供商",
        "codex.configError": "无法读取 Codex 配置：{error}",
        "codex.noBackupNeeded": "{path} 不存在，无需备份",
        "codex.uninstallPrompt": "选择要移除的项目",
        "codex.uninstallItemApiConfig": "API 提供商配置",
        "codex.uninstallItemMcpConfig": "MCP 服务配置",
        "codex.uninstallItemConfig": "config.toml",
        "codex.uninstallItemAuth": "auth.json",
        "codex.uninstallItemBackups": "备份",
        "codex.removedItem": "已移除 {item}",
        "codex.removedConfig": "已移除 {config}",
        "codex.configNotFound": "未找到 config.toml",
        "codex.authNotFound": "未找到 auth.json",
        "codex.backupsNotFound": "未找到备份",
        "mcp.selectMcpServices": "选择 MCP 服务",
        "mcp.apiKeyPrompt": "{service} 的 API 密钥",
        "mcp.services.context7.name": "Context7",
        "mcp.services.context7.description": "获取最新的库文档",
        "mcp.services.open-websearch.name": "开放网页搜索",
        "mcp.services.open-websearch.description": "通过 DuckDuckGo、Bing、Brave 搜索网页",
        "mcp.services.spec-workflow.name": "规范工作流",
        "mcp.services.spec-workflow.description": "规范驱动的开发工作流",
        "mcp.services.mcp-deepwiki.name": "DeepWiki",
        "mcp.services.mcp-deepwiki.description": "GitHub 仓库文档",
        "mcp.services.Playwright.name": "Playwright",
        "mcp.services.Playwright.description": "浏览器自动化",
        "mcp.services.exa.name": "Exa 搜索",
        "mcp.services.exa.description": "Exa AI 网页搜索",
        "mcp.services.exa.apiKeyPrompt": "Exa API 密钥",
        "updater.checkingTools": "正在检查工具版本",
        "updater.checkingVersion": "正在检查 {tool} 版本...",
        "updater.notInstalled": "{tool} 未安装",
        "updater.upToDate": "{tool} 已是最新版本（{version}）",
        "updater.cannotCheckVersion": "无法获取 {tool} 的最新版本",
        "updater.currentVersion": "当前版本：{version}",
        "updater.latestVersion": "最新版本：{version}",
        "updater.confirmUpdate": "现在更新 {tool}？",
        "updater.updateSkipped": "已跳过更新",
        "updater.updating": "正在更新 {tool}...",
        "updater.updateSuccess": "{tool} 更新完成",
        "updater.updateFailed": "{tool} 更新失败",
        "updater.summary": "更新汇总",
        "menu.title": "ZCF - 零配置代码流",
        "menu.selectAction": "选择操作",
        "menu.codexApi": "配置 Codex API 提供商",
        "menu.codexMcp": "配置 Codex MCP 服务",
        "menu.codexProviders": "管理 Codex 提供商",
        "menu.codexBackup": "备份 Codex 配置",
        "menu.codexUpdate": "安装或更新 Codex CLI",
        "menu.codexUninstall": "移除 Codex 配置",
        "menu.checkUpdates": "检查 Claude Code / CCR / CCometixLine 更新",
        "menu.exit": "退出",
    },
}

_current_lang = "en"


def init_i18n(lang: str) -> None:
    """Select the active catalog; unknown languages fall back to English."""
    global _current_lang
    _current_lang = lang if lang in SUPPORTED_LANGS else "en"


def get_language() -> str:
    return _current_lang


def t(key: str, **params) -> str:
    """Translate a key, falling back to English and then to the key itself."""
    template = MESSAGES.get(_current_lang, {}).get(key) or MESSAGES["en"].get(key, key)
    if not params:
        return template
    try:
        return template.format(**params)
    except (KeyError, IndexError):
        return template
