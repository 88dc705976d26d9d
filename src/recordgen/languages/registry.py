"""
Language plugin registry.

Central registry for all declaration sources. Handles plugin lookup by
language or by file extension, and instantiation.
"""

from pathlib import Path
from typing import Type

from recordgen.config.models import LanguageType
from recordgen.languages.base.plugin import LanguagePlugin
from recordgen.languages.java.plugin import JavaPlugin
from recordgen.languages.swift.plugin import SwiftPlugin


class LanguagePluginRegistry:
    """Registry for language plugins."""

    _plugins: dict[LanguageType, Type[LanguagePlugin]] = {
        LanguageType.SWIFT: SwiftPlugin,
        LanguageType.JAVA: JavaPlugin,
    }

    @classmethod
    def get_plugin(cls, language: LanguageType) -> LanguagePlugin:
        """
        Get a language plugin instance.

        Args:
            language: The language type

        Returns:
            Instantiated language plugin

        Raises:
            ValueError: If language is not supported
        """
        if language not in cls._plugins:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported languages: {cls.list_supported_languages()}"
            )

        plugin_class = cls._plugins[language]
        return plugin_class()

    @classmethod
    def get_plugin_for_path(cls, file_path: Path) -> LanguagePlugin:
        """
        Get the plugin handling a file, based on its extension.

        Raises:
            ValueError: If no plugin handles the extension
        """
        suffix = file_path.suffix.lower()
        for plugin_class in cls._plugins.values():
            plugin = plugin_class()
            if suffix in plugin.file_extensions:
                return plugin
        raise ValueError(
            f"No language plugin for '{file_path.name}'. "
            f"Supported languages: {cls.list_supported_languages()}"
        )

    @classmethod
    def register_plugin(cls, language: LanguageType, plugin_class: Type[LanguagePlugin]):
        """
        Register a new language plugin.

        Args:
            language: The language type
            plugin_class: The plugin class (must extend LanguagePlugin)
        """
        if not issubclass(plugin_class, LanguagePlugin):
            raise TypeError(f"{plugin_class} must extend LanguagePlugin")

        cls._plugins[language] = plugin_class

    @classmethod
    def list_supported_languages(cls) -> list[str]:
        """Get a list of supported language names."""
        return [lang.value for lang in cls._plugins.keys()]


def get_plugin(language: LanguageType | None = None, file_path: Path | None = None) -> LanguagePlugin:
    """
    Convenience function to get a language plugin.

    An explicit language wins; otherwise the file extension decides.
    """
    if language is not None:
        return LanguagePluginRegistry.get_plugin(language)
    if file_path is not None:
        return LanguagePluginRegistry.get_plugin_for_path(file_path)
    return LanguagePluginRegistry.get_plugin(LanguageType.SWIFT)
