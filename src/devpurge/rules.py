"""Folder rule definitions for devpurge."""

from types import MappingProxyType

from devpurge.models import FolderRule

DOTNET_MARKERS = frozenset({"*.csproj", "*.fsproj", "*.sln"})

# All removable folder types, in reporting order
FOLDER_RULES: tuple[FolderRule, ...] = (
    FolderRule(
        folder_name="node_modules",
        project_type="JavaScript/TypeScript",
        marker_files=frozenset({"package.json"}),
    ),
    FolderRule(
        folder_name="target",
        project_type="Rust",
        marker_files=frozenset({"Cargo.toml"}),
    ),
    FolderRule(
        folder_name="build",
        project_type="Java/Gradle/C++",
        marker_files=frozenset(
            {
                "pom.xml",
                "build.gradle",
                "build.gradle.kts",
                "Makefile",
                "CMakeLists.txt",
                "angular.json",
            }
        ),
    ),
    FolderRule(
        folder_name="dist",
        project_type="Web",
        marker_files=frozenset(
            {
                "package.json",
                "angular.json",
                "tsconfig.json",
                "vite.config.js",
                "vite.config.ts",
            }
        ),
    ),
    FolderRule(
        folder_name=".gradle",
        project_type="Gradle",
        marker_files=frozenset(
            {"build.gradle", "build.gradle.kts", "settings.gradle", "settings.gradle.kts"}
        ),
    ),
    FolderRule(
        folder_name="vendor",
        project_type="PHP/Go/Ruby",
        marker_files=frozenset({"composer.json", "go.mod", "Gemfile"}),
    ),
    FolderRule(folder_name="bin", project_type=".NET", marker_files=DOTNET_MARKERS),
    FolderRule(folder_name="obj", project_type=".NET", marker_files=DOTNET_MARKERS),
    # Bytecode caches are safe to delete wherever they are found
    FolderRule(folder_name="__pycache__", project_type="Python"),
    FolderRule(
        folder_name=".dart_tool",
        project_type="Dart",
        marker_files=frozenset({"pubspec.yaml"}),
    ),
    FolderRule(
        folder_name=".angular",
        project_type="Angular",
        marker_files=frozenset({"angular.json"}),
    ),
    FolderRule(
        folder_name=".next",
        project_type="Next.js",
        marker_files=frozenset({"next.config.js", "next.config.ts"}),
    ),
    FolderRule(
        folder_name=".nuxt",
        project_type="Nuxt.js",
        marker_files=frozenset({"nuxt.config.js", "nuxt.config.ts"}),
    ),
)

RULES_BY_NAME: MappingProxyType[str, FolderRule] = MappingProxyType(
    {rule.folder_name: rule for rule in FOLDER_RULES}
)


def rules() -> tuple[FolderRule, ...]:
    """Get all folder rules in reporting order."""
    return FOLDER_RULES


def lookup(basename: str) -> FolderRule | None:
    """Get the rule matching a directory basename."""
    return RULES_BY_NAME.get(basename)
