import flet as ft

from campusgpa.config.settings import configure_logging, settings
from campusgpa.ui.app import main


if __name__ == "__main__":
    configure_logging(settings.log_level)
    ft.app(
        target=main,
        view=ft.AppView.WEB_BROWSER if settings.web_mode else ft.AppView.FLET_APP,
        port=settings.port,
    )
