"""Built-in chapter catalogs and their JSON form."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from book_search.models import Document

logger = logging.getLogger(__name__)


def _from_keyword_strings(entries: Iterable[tuple[str, str, str, str]]) -> tuple[Document, ...]:
    return tuple(
        Document(title=title, url=url, chapter=chapter, keywords=tuple(keywords.lower().split()))
        for title, url, chapter, keywords in entries
    )


SWIFT_BOOK: tuple[Document, ...] = (
    Document(
        title="Введение",
        url="chapters/00-introduction.html",
        chapter="Введение",
        keywords=("книга", "swift", "ios", "начало", "обзор", "введение", "ecommerce", "viper"),
    ),
    Document(
        title="Знакомство с Xcode",
        url="chapters/01-xcode.html",
        chapter="Глава 1",
        keywords=("xcode", "ide", "установка", "симулятор", "проект", "playground", "interface builder", "apple"),
    ),
    Document(
        title="Основы Swift",
        url="chapters/02-swift-basics.html",
        chapter="Глава 2",
        keywords=("swift", "переменные", "var", "let", "константы", "типы", "int", "string", "double", "bool", "интерполяция", "массивы", "словари", "array", "dictionary"),
    ),
    Document(
        title="Управление потоком",
        url="chapters/03-control-flow.html",
        chapter="Глава 3",
        keywords=("if", "else", "switch", "case", "for", "while", "guard", "условия", "циклы", "control flow"),
    ),
    Document(
        title="Функции и Closures",
        url="chapters/04-functions.html",
        chapter="Глава 4",
        keywords=("функции", "function", "closure", "замыкания", "параметры", "return", "inout", "escaping", "trailing"),
    ),
    Document(
        title="ООП в Swift",
        url="chapters/05-oop.html",
        chapter="Глава 5",
        keywords=("ооп", "класс", "class", "struct", "структура", "наследование", "inheritance", "инициализатор", "init", "enum", "enumeration"),
    ),
    Document(
        title="Протоколы",
        url="chapters/06-protocols.html",
        chapter="Глава 6",
        keywords=("protocol", "протокол", "extension", "расширение", "delegate", "делегат", "pop", "protocol oriented"),
    ),
    Document(
        title="Optionals",
        url="chapters/07-optionals.html",
        chapter="Глава 7",
        keywords=("optional", "опциональ", "nil", "unwrap", "guard let", "if let", "optional chaining", "nil coalescing", "force unwrap"),
    ),
    Document(
        title="Управление памятью (ARC)",
        url="chapters/08-memory.html",
        chapter="Глава 8",
        keywords=("память", "memory", "arc", "strong", "weak", "unowned", "retain cycle", "утечка памяти", "reference counting"),
    ),
    Document(
        title="Generics",
        url="chapters/09-generics.html",
        chapter="Глава 9",
        keywords=("generics", "дженерики", "generic type", "where", "associated type", "type constraint"),
    ),
    Document(
        title="Concurrency",
        url="chapters/10-concurrency.html",
        chapter="Глава 10",
        keywords=("concurrency", "async", "await", "task", "gcd", "dispatch", "многопоточность", "actor", "main thread"),
    ),
    Document(
        title="UIKit основы",
        url="chapters/11-uikit-basics.html",
        chapter="Глава 11",
        keywords=("uikit", "uiview", "uiviewcontroller", "auto layout", "constraints", "storyboard", "uibutton", "uilabel", "uitableview"),
    ),
    Document(
        title="Программный UI",
        url="chapters/12-programmatic-ui.html",
        chapter="Глава 12",
        keywords=("программный ui", "snapkit", "без storyboard", "scenedelegate", "nslayoutconstraint", "программные constraints"),
    ),
    Document(
        title="VIPER архитектура",
        url="chapters/13-viper.html",
        chapter="Глава 13",
        keywords=("viper", "архитектура", "view", "interactor", "presenter", "entity", "router", "модуль", "clean architecture"),
    ),
    Document(
        title="Настройка проекта",
        url="chapters/14-project-setup.html",
        chapter="Глава 14",
        keywords=("project setup", "spm", "swift package manager", "firebase", "cocoapods", "структура проекта"),
    ),
    Document(
        title="Authentication",
        url="chapters/15-authentication.html",
        chapter="Глава 15",
        keywords=("authentication", "аутентификация", "firebase auth", "google sign in", "login", "register", "авторизация"),
    ),
    Document(
        title="Products",
        url="chapters/16-products.html",
        chapter="Глава 16",
        keywords=("products", "товары", "каталог", "категории", "uicollectionview", "firestore", "product list"),
    ),
    Document(
        title="Cart",
        url="chapters/17-cart.html",
        chapter="Глава 17",
        keywords=("cart", "корзина", "покупки", "firestore", "добавление", "удаление", "quantity"),
    ),
    Document(
        title="Favorites",
        url="chapters/18-favorites.html",
        chapter="Глава 18",
        keywords=("favorites", "избранное", "realm", "локальная база", "wishlist", "сохранение"),
    ),
    Document(
        title="Orders",
        url="chapters/19-orders.html",
        chapter="Глава 19",
        keywords=("orders", "заказы", "оформление", "checkout", "адреса", "история заказов"),
    ),
    Document(
        title="Profile",
        url="chapters/20-profile.html",
        chapter="Глава 20",
        keywords=("profile", "профиль", "пользователь", "настройки", "logout", "user settings"),
    ),
    Document(
        title="Reusable Views",
        url="chapters/21-reusable-views.html",
        chapter="Глава 21",
        keywords=("reusable", "dskit", "компоненты", "переиспользуемые", "ui components", "темизация", "theme"),
    ),
)

ANDROID_BOOK: tuple[Document, ...] = _from_keyword_strings(
    [
        ("Введение", "chapters/00-introduction.html", "Введение", "введение о книге начало старт требования android kotlin"),
        ("Kotlin для JS/PHP разработчиков", "chapters/00a-kotlin-for-developers.html", "Введение", "javascript php typescript react vue nullable data class coroutines flow suspend async"),
        ("Глава 1: Основы Compose", "chapters/01-compose-basics.html", "Глава 1", "jetpack compose composable state remember modifier column row box"),
        ("Глава 2: MVVM + Clean Architecture", "chapters/02-mvvm.html", "Глава 2", "mvvm model view viewmodel usecase repository clean architecture"),
        ("Глава 3: Настройка проекта", "chapters/03-project-setup.html", "Глава 3", "android studio gradle проект структура модули"),
        ("Глава 4: Retrofit + API", "chapters/04-api-layer.html", "Глава 4", "retrofit okhttp moshi network api dummyjson"),
        ("Парсинг JSON", "chapters/json-parsing.html", "Приложение", "json parsing moshi gson retrofit модели массив объект nested вложенный annotation nullable упражнения"),
        ("Глава 5: Список товаров", "chapters/05-product-list.html", "Глава 5", "lazycolumn lazygrid coil список товары product grid"),
        ("Глава 6: Детали товара", "chapters/06-product-detail.html", "Глава 6", "detail screen pager изображения галерея"),
        ("Глава 7: Поиск", "chapters/07-search.html", "Глава 7", "search searchbar поиск фильтрация flow debounce"),
        ("Глава 8: Избранное", "chapters/08-favorites.html", "Глава 8", "favorites избранное room database datastore"),
        ("Глава 9: Корзина", "chapters/09-cart.html", "Глава 9", "cart корзина badge количество checkout оформление"),
        ("Глава 10: Навигация", "chapters/10-navigation.html", "Глава 10", "navigation navhost navcontroller routes deep linking"),
        ("Глава 11: Hilt DI", "chapters/11-di-hilt.html", "Глава 11", "hilt dagger dependency injection modules provides binds"),
        ("Глава 12: Тестирование", "chapters/12-testing.html", "Глава 12", "testing junit mockito ui tests espresso"),
        ("Глава 13: Финал", "chapters/13-final.html", "Глава 13", "финал proguard play store публикация release"),
        ("Шпаргалка Kotlin vs JS", "chapters/cheatsheet.html", "Дополнительно", "шпаргалка cheatsheet справка kotlin javascript php типы"),
        ("Частые ошибки новичков", "chapters/common-mistakes.html", "Дополнительно", "ошибки mistakes nullable npe coroutines crash"),
        ("Глоссарий терминов", "chapters/glossary.html", "Дополнительно", "глоссарий термины словарь compose viewmodel flow coroutines"),
    ]
)

SWIFTUI_BOOK: tuple[Document, ...] = _from_keyword_strings(
    [
        ("Введение", "chapters/00-introduction.html", "Главы книги", "введение о книге начало старт требования"),
        ("Swift для JS/PHP разработчиков", "chapters/00a-swift-for-developers.html", "Главы книги", "javascript php typescript react vue optional типизация state binding observable property wrapper closure async await struct class"),
        ("Глава 1: Основы SwiftUI", "chapters/01-swiftui-basics.html", "Глава 1", "swiftui view state binding модификаторы vstack hstack zstack"),
        ("Глава 2: MVVM архитектура", "chapters/02-mvvm.html", "Глава 2", "mvvm model view viewmodel observable observedobject архитектура"),
        ("Глава 3: Настройка проекта", "chapters/03-project-setup.html", "Глава 3", "xcode проект spm swift package manager структура"),
        ("Глава 4: API Layer", "chapters/04-api-layer.html", "Глава 4", "api network urlsession async await json codable dummyjson"),
        ("Глава 5: Список товаров", "chapters/05-product-list.html", "Глава 5", "lazyvgrid asyncimage список товары product grid"),
        ("Глава 6: Детали товара", "chapters/06-product-detail.html", "Глава 6", "detail tabview slider изображения галерея"),
        ("Глава 7: Поиск", "chapters/07-search.html", "Глава 7", "search searchable поиск фильтрация debounce"),
        ("Глава 8: Избранное", "chapters/08-favorites.html", "Глава 8", "favorites избранное userdefaults appstorage сердце"),
        ("Глава 9: Корзина", "chapters/09-cart.html", "Глава 9", "cart корзина badge количество checkout оформление"),
        ("Глава 10: Навигация", "chapters/10-navigation.html", "Глава 10", "navigation navigationstack tabview router deep linking"),
        ("Глава 11: Тестирование", "chapters/11-testing.html", "Глава 11", "testing unit ui tests xctest mock"),
        ("Глава 12: Финал", "chapters/12-final.html", "Глава 12", "финал анимации app store публикация итог"),
        ("Шпаргалка Swift vs JS", "chapters/cheatsheet.html", "Дополнительные материалы", "шпаргалка cheatsheet справка swift javascript php типы массивы функции closures"),
        ("Частые ошибки новичков", "chapters/common-mistakes.html", "Дополнительные материалы", "ошибки mistakes let var optional unwrap state binding crash"),
        ("Практические задания", "chapters/exercises.html", "Дополнительные материалы", "задания упражнения тесты quiz практика exercises"),
        ("Глоссарий терминов", "chapters/glossary.html", "Дополнительные материалы", "глоссарий термины словарь optional struct class protocol enum closure state binding observable"),
        ("Советы по Xcode", "chapters/xcode-tips.html", "Дополнительные материалы", "xcode горячие клавиши shortcuts preview debug навигация"),
        ("Визуальные схемы", "chapters/diagrams.html", "Дополнительные материалы", "схемы диаграммы mvvm архитектура flow данные структура"),
        ("Отладка", "chapters/debugging.html", "Дополнительные материалы", "отладка debug print breakpoint ошибки crash lldb консоль"),
    ]
)

CATALOGS: dict[str, tuple[Document, ...]] = {
    "swift": SWIFT_BOOK,
    "android": ANDROID_BOOK,
    "swiftui": SWIFTUI_BOOK,
}


def get_catalog(name: str) -> tuple[Document, ...]:
    """Return a built-in catalog by name.

    Args:
        name: Catalog name, one of ``swift``, ``android`` or ``swiftui``.

    Returns:
        Documents of the catalog in display order.

    Raises:
        ValueError: If no catalog has that name.
    """
    try:
        return CATALOGS[name]
    except KeyError:
        msg = f"Unknown catalog: {name!r} (expected one of {', '.join(sorted(CATALOGS))})"
        raise ValueError(msg) from None


def document_from_dict(entry: dict[str, Any]) -> Document:
    """Build a Document from a catalog entry.

    Keywords may be a list of strings or a single space-separated string.

    Args:
        entry: Mapping with title, url, chapter and keywords.

    Returns:
        Document with lowercased keywords.

    Raises:
        ValueError: If a required field is missing or has the wrong type.
    """
    for key in ("title", "url"):
        if not isinstance(entry.get(key), str):
            msg = f"Catalog entry is missing a string {key!r}: {entry!r}"
            raise ValueError(msg)

    chapter = entry.get("chapter", "")
    if not isinstance(chapter, str):
        msg = f"Catalog entry has a non-string 'chapter': {entry!r}"
        raise ValueError(msg)

    raw_keywords = entry.get("keywords", [])
    if isinstance(raw_keywords, str):
        keywords = raw_keywords.split()
    elif isinstance(raw_keywords, list) and all(isinstance(kw, str) for kw in raw_keywords):
        keywords = raw_keywords
    else:
        msg = f"Catalog entry has invalid 'keywords': {entry!r}"
        raise ValueError(msg)

    return Document(
        title=entry["title"],
        url=entry["url"],
        chapter=chapter,
        keywords=tuple(kw.lower() for kw in keywords),
    )


def document_to_dict(doc: Document) -> dict[str, Any]:
    """Convert a Document to its catalog entry form."""
    return {
        "title": doc.title,
        "url": doc.url,
        "chapter": doc.chapter,
        "keywords": list(doc.keywords),
    }


def load_catalog(path: Path) -> tuple[Document, ...]:
    """Load a catalog from a JSON file.

    Args:
        path: Path to a JSON array of catalog entries.

    Returns:
        Documents in file order.

    Raises:
        ValueError: If the file is not valid JSON or an entry is malformed.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Catalog is not valid JSON: {path}"
        raise ValueError(msg) from exc

    if not isinstance(data, list):
        msg = f"Catalog must be a JSON array: {path}"
        raise ValueError(msg)

    documents = []
    for entry in data:
        if not isinstance(entry, dict):
            msg = f"Catalog entry must be an object: {entry!r}"
            raise ValueError(msg)
        documents.append(document_from_dict(entry))

    logger.info("Loaded %d documents from %s", len(documents), path)
    return tuple(documents)


def dump_catalog(documents: Iterable[Document], path: Path) -> None:
    """Write documents to a JSON catalog file.

    Args:
        documents: Documents to write, in display order.
        path: Destination file.
    """
    entries = [document_to_dict(doc) for doc in documents]
    path.write_text(json.dumps(entries, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    logger.info("Wrote %d documents to %s", len(entries), path)
