"""Centralized Qt stylesheets for the practice window."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_BG.get(theme)};
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QSpinBox, QComboBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_option_button_style(selected: bool, theme: Theme = Theme.LIGHT) -> str:
        if selected:
            return (
                f"text-align: left; padding: 10px; border: 2px solid {ColorPalette.ACCENT.get(theme)};"
                f" background-color: {ColorPalette.ACCENT_SOFT.get(theme)};"
            )
        return f"text-align: left; padding: 10px; border: 2px solid {ColorPalette.BORDER.get(theme)};"

    @staticmethod
    def get_navigator_button_style(answered: bool, current: bool, theme: Theme = Theme.LIGHT) -> str:
        background = ColorPalette.ACCENT.get(theme) if answered else ColorPalette.BUTTON_BG.get(theme)
        text = ColorPalette.ACCENT_TEXT.get(theme) if answered else ColorPalette.TEXT_PRIMARY.get(theme)
        border = ColorPalette.TEXT_PRIMARY.get(theme) if current else ColorPalette.BORDER.get(theme)
        width = 2 if current else 1
        return (
            f"min-width: 28px; max-width: 28px; min-height: 28px; padding: 0;"
            f" background-color: {background}; color: {text}; border: {width}px solid {border};"
        )

    @staticmethod
    def get_clock_style(low_time: bool, blink_state: bool = False, theme: Theme = Theme.LIGHT) -> str:
        base = "font-family: monospace; font-size: 16pt; font-weight: bold; padding: 2px 6px; border-radius: 4px;"
        if not low_time:
            return base
        background = "#b91c1c" if blink_state else ColorPalette.ERROR.get(theme)
        return base + f" color: #fff; background-color: {background};"

    @staticmethod
    def get_review_style(is_correct: bool, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.SUCCESS.get(theme) if is_correct else ColorPalette.ERROR.get(theme)
        return f"color: {color}; font-weight: bold;"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
