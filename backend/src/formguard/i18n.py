"""Translation dictionary for validator messages.

Messages are written in English and used as lookup keys; a language
without an entry for a text falls back to the English text.
"""

from formguard.merge import deepmerge

BUILTIN_TRANSLATIONS: dict[str, dict[str, str]] = {
    "ru": {
        "This field is required": "Это поле обязательно для заполнения",
        "Please use the required format": "Пожалуйста, используйте требуемый формат",
        "Please enter a valid email address": "Пожалуйста, введите корректный адрес электронной почты",
        "Please enter a valid phone number": "Пожалуйста, введите корректный номер телефона",
        "Please enter a valid URL": "Пожалуйста, введите корректный URL",
        "Please enter a valid date": "Пожалуйста, введите корректную дату",
        "Please enter a valid number": "Пожалуйста, введите число",
        "Please enter more characters": "Пожалуйста, введите больше символов",
        "Please enter fewer characters": "Пожалуйста, введите меньше символов",
        "Please enter a greater value": "Пожалуйста, введите большее значение",
        "Please enter a smaller value": "Пожалуйста, введите меньшее значение",
        "Please choose a file of an allowed type": "Пожалуйста, выберите файл допустимого типа",
        "The file is too big": "Файл слишком большой",
        "Can not send form!": "Невозможно отправить форму!",
        "JSON parsing error": "Ошибка разбора JSON",
    },
}


class Dictionary:
    """Per-language translations keyed by English source text.

    Example:
        dictionary = Dictionary({"de": {"This field is required": "Pflichtfeld"}})
        dictionary.translate("This field is required", "de")  # "Pflichtfeld"
    """

    def __init__(self, translations: dict[str, dict[str, str]] | None = None):
        self.translations: dict[str, dict[str, str]] = deepmerge(BUILTIN_TRANSLATIONS, translations)

    def translate(self, text: str, language: str) -> str:
        return self.translations.get(language, {}).get(text, text)

    def add_translation(self, source_text: str, translated_text: str, language: str) -> None:
        self.translations.setdefault(language, {})[source_text] = translated_text

    def languages(self) -> list[str]:
        return sorted(self.translations)
