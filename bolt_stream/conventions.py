"""
Naming and layout conventions for generated screens and components.

Screen and component actions only carry names and types; the file layout
of the generated project is derived from them here.
"""
import re
from dataclasses import dataclass, field
from typing import Final

PROJECT_STRUCTURE: Final[dict] = {
    "screens": {
        "page": "src/screens/pages",
        "modal": "src/screens/modals",
        "drawer": "src/screens/drawers",
        "component": "src/screens/components",
    },
    "shared": {
        "shared": "src/components/shared",
        "layout": "src/components/layout",
        "screen-specific": "src/components/screen-specific",
        "utils": "src/utils",
        "types": "src/types",
    },
    "navigation": {
        "routes": "src/routes",
        "config": "src/config",
    },
}

REQUIRED_DEPENDENCIES: Final[list] = ["react", "react-dom"]

OPTIONAL_DEPENDENCIES: Final[dict] = {
    "routing": ["react-router-dom", "@reach/router"],
    "state_management": ["zustand", "jotai", "valtio"],
    "forms": ["react-hook-form", "formik"],
    "validation": ["zod", "yup", "joi"],
    "styling": ["styled-components", "emotion", "tailwindcss"],
    "animation": ["framer-motion", "react-spring"],
    "ui": ["@radix-ui/react-dialog", "@headlessui/react", "chakra-ui"],
}

_WHITESPACE = re.compile(r'\s+')
_NON_KEBAB = re.compile(r'[^a-z0-9-]')
_NON_ALNUM = re.compile(r'[^a-zA-Z0-9]')


def _kebab(name: str) -> str:
    return _NON_KEBAB.sub('', _WHITESPACE.sub('-', name.lower()))


def screen_id(name: str) -> str:
    """
    Derive a screen id from a display name.

    Examples:
        >>> screen_id("User Profile!")
        'user-profile'
    """
    return _kebab(name)


def folder_name(name: str) -> str:
    return _kebab(name)


def component_name(name: str) -> str:
    """
    Derive a component identifier: alphanumerics only, first letter upper-cased.

    Examples:
        >>> component_name("nav bar")
        'Navbar'
    """
    stripped = _NON_ALNUM.sub('', _WHITESPACE.sub('', name))
    return stripped[:1].upper() + stripped[1:]


def file_name(name: str, kind: str) -> str:
    """
    Derive a file name for a screen, component or style sheet.

    Args:
        name: Display name
        kind: 'screen', 'component' or 'style'; anything else yields '.ts'
    """
    base = _kebab(name)
    if kind in ("screen", "component"):
        return f"{base}.tsx"
    if kind == "style":
        return f"{base}.module.css"
    return f"{base}.ts"


def screen_path(name: str, screen_type: str) -> str:
    """Folder holding a screen's files, e.g. ``src/screens/pages/home``."""
    base = PROJECT_STRUCTURE["screens"].get(screen_type, "src/screens")
    return f"{base}/{folder_name(name)}"


def component_path(name: str, component_type: str) -> str:
    """File path of a component, e.g. ``src/components/shared/button.tsx``."""
    base = PROJECT_STRUCTURE["shared"].get(component_type, "src/components")
    return f"{base}/{file_name(name, 'component')}"


def screen_dependencies(screen_type: str) -> list[str]:
    """Packages a screen of the given type needs."""
    if screen_type == "page":
        return REQUIRED_DEPENDENCIES + OPTIONAL_DEPENDENCIES["routing"]
    if screen_type in ("modal", "drawer"):
        return REQUIRED_DEPENDENCIES + OPTIONAL_DEPENDENCIES["ui"]
    return list(REQUIRED_DEPENDENCIES)


@dataclass
class ScreenPlan:
    """File layout planned for one screen."""
    screen_id: str
    component_name: str
    folder_path: str
    file_path: str
    dependencies: list[str] = field(default_factory=list)
    files: dict[str, str] = field(default_factory=dict)


def screen_metadata(name: str, screen_type: str) -> ScreenPlan:
    """Plan the folder, files and dependencies of a screen."""
    folder_path = screen_path(name, screen_type)
    main_file = f"{folder_path}/{file_name(name, 'screen')}"

    return ScreenPlan(
        screen_id=screen_id(name),
        component_name=component_name(name),
        folder_path=folder_path,
        file_path=main_file,
        dependencies=screen_dependencies(screen_type),
        files={
            "main": main_file,
            "styles": f"{folder_path}/{file_name(name, 'style')}",
            "types": f"{folder_path}/types.ts",
            "index": f"{folder_path}/index.ts",
        },
    )


def validate_screen_structure(file_paths: list[str]) -> tuple[bool, list[str]]:
    """
    Check that every screen folder has a main component and a style sheet.

    Returns:
        A tuple of (is_valid, issues)
    """
    issues: list[str] = []

    folders: list[str] = []
    for path in file_paths:
        if "/screens/" not in path:
            continue
        folder = path.rsplit("/", 1)[0]
        if folder not in folders:
            folders.append(folder)

    for folder in folders:
        folder_files = [p for p in file_paths if p.startswith(folder)]
        has_main = any(p.endswith(".tsx") and "/components/" not in p for p in folder_files)
        has_styles = any(p.endswith(".module.css") for p in folder_files)

        if not has_main:
            issues.append(f"Missing main component file in {folder}")
        if not has_styles:
            issues.append(f"Missing styles file in {folder}")

    return len(issues) == 0, issues
