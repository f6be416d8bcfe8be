from __future__ import annotations

from campusgpa.services.storage import Storage

THEME_KEY = "theme"
THEMES = ("light", "dark")


class PreferenceStore:
    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    def get_theme(self) -> str:
        theme = self.storage.get_json(THEME_KEY)
        return theme if theme in THEMES else "light"

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            raise ValueError(f"Unsupported theme: {theme}")
        self.storage.set_json(THEME_KEY, theme)

    def toggle_theme(self) -> str:
        new_theme = "light" if self.get_theme() == "dark" else "dark"
        self.set_theme(new_theme)
        return new_theme
