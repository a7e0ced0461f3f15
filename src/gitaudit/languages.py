"""Language classification by file path.

``classify`` never raises: anything it cannot place maps to the ``OTHER``
descriptor, which the engine neither analyzes nor counts.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional


@dataclass(frozen=True, slots=True)
class LanguageDescriptor:
    """Display name, rule family tag and line-comment marker of a language."""

    name: str
    family: str
    comment: Optional[str] = None

    @property
    def analyzable(self) -> bool:
        return self.family != "other"


OTHER = LanguageDescriptor("Other", "other", None)

# extension → (display name, family, line comment)
_EXTENSIONS: dict[str, tuple[str, str, Optional[str]]] = {
    # web / frontend
    ".js": ("JavaScript", "js", "//"),
    ".mjs": ("JavaScript (ESM)", "js", "//"),
    ".cjs": ("JavaScript (CJS)", "js", "//"),
    ".jsx": ("React JSX", "js", "//"),
    ".ts": ("TypeScript", "ts", "//"),
    ".tsx": ("TypeScript React", "ts", "//"),
    ".vue": ("Vue", "js", "//"),
    ".svelte": ("Svelte", "js", "//"),
    ".astro": ("Astro", "js", "//"),
    ".coffee": ("CoffeeScript", "coffee", "#"),
    # styling
    ".css": ("CSS", "css", "/*"),
    ".scss": ("SCSS", "css", "//"),
    ".sass": ("Sass", "css", "//"),
    ".less": ("Less", "css", "//"),
    ".styl": ("Stylus", "css", "//"),
    # markup and templates
    ".html": ("HTML", "html", "<!--"),
    ".htm": ("HTML", "html", "<!--"),
    ".xml": ("XML", "xml", "<!--"),
    ".xhtml": ("XHTML", "html", "<!--"),
    ".svg": ("SVG", "xml", "<!--"),
    ".pug": ("Pug", "html", "//"),
    ".ejs": ("EJS", "html", "<%#"),
    ".hbs": ("Handlebars", "html", "{{!"),
    ".mustache": ("Mustache", "html", "{{!"),
    ".njk": ("Nunjucks", "html", "{#"),
    ".twig": ("Twig", "html", "{#"),
    ".erb": ("ERB", "html", "<%#"),
    ".haml": ("Haml", "html", "-#"),
    ".slim": ("Slim", "html", "/"),
    ".blade.php": ("Blade", "html", "{{--"),
    ".jsp": ("JSP", "html", "<%--"),
    # python
    ".py": ("Python", "python", "#"),
    ".pyw": ("Python (Windows)", "python", "#"),
    ".pyx": ("Cython", "python", "#"),
    ".pxd": ("Cython Declaration", "python", "#"),
    ".pyi": ("Python Stub", "python", "#"),
    ".ipynb": ("Jupyter Notebook", "python", "#"),
    # ruby
    ".rb": ("Ruby", "ruby", "#"),
    ".rake": ("Rake", "ruby", "#"),
    ".gemspec": ("Gemspec", "ruby", "#"),
    # php
    ".php": ("PHP", "php", "//"),
    ".phtml": ("PHP Template", "php", "//"),
    # jvm
    ".java": ("Java", "java", "//"),
    ".kt": ("Kotlin", "kotlin", "//"),
    ".kts": ("Kotlin Script", "kotlin", "//"),
    ".scala": ("Scala", "scala", "//"),
    ".groovy": ("Groovy", "groovy", "//"),
    ".gradle": ("Gradle", "groovy", "//"),
    ".clj": ("Clojure", "clojure", ";"),
    ".cljs": ("ClojureScript", "clojure", ";"),
    # .net
    ".cs": ("C#", "csharp", "//"),
    ".csx": ("C# Script", "csharp", "//"),
    ".fs": ("F#", "fsharp", "//"),
    ".fsx": ("F# Script", "fsharp", "//"),
    ".vb": ("Visual Basic", "vb", "'"),
    ".razor": ("Razor", "csharp", "//"),
    ".cshtml": ("Razor HTML", "csharp", "//"),
    # systems
    ".c": ("C", "c", "//"),
    ".h": ("C Header", "c", "//"),
    ".cpp": ("C++", "cpp", "//"),
    ".cxx": ("C++", "cpp", "//"),
    ".cc": ("C++", "cpp", "//"),
    ".hpp": ("C++ Header", "cpp", "//"),
    ".hxx": ("C++ Header", "cpp", "//"),
    ".m": ("Objective-C", "objc", "//"),
    ".mm": ("Objective-C++", "objc", "//"),
    ".rs": ("Rust", "rust", "//"),
    ".go": ("Go", "go", "//"),
    ".zig": ("Zig", "zig", "//"),
    ".nim": ("Nim", "nim", "#"),
    ".v": ("V", "vlang", "//"),
    ".d": ("D", "d", "//"),
    ".ada": ("Ada", "ada", "--"),
    ".adb": ("Ada Body", "ada", "--"),
    ".ads": ("Ada Spec", "ada", "--"),
    ".pas": ("Pascal", "pascal", "//"),
    ".pp": ("Pascal", "pascal", "//"),
    ".f": ("Fortran", "fortran", "!"),
    ".f90": ("Fortran 90", "fortran", "!"),
    ".f95": ("Fortran 95", "fortran", "!"),
    ".f03": ("Fortran 2003", "fortran", "!"),
    ".for": ("Fortran", "fortran", "!"),
    ".cob": ("COBOL", "cobol", "*>"),
    ".cbl": ("COBOL", "cobol", "*>"),
    ".swift": ("Swift", "swift", "//"),
    # functional
    ".hs": ("Haskell", "haskell", "--"),
    ".lhs": ("Literate Haskell", "haskell", "--"),
    ".ml": ("OCaml", "ocaml", "(*"),
    ".mli": ("OCaml Interface", "ocaml", "(*"),
    ".ex": ("Elixir", "elixir", "#"),
    ".exs": ("Elixir Script", "elixir", "#"),
    ".erl": ("Erlang", "erlang", "%"),
    ".hrl": ("Erlang Header", "erlang", "%"),
    ".elm": ("Elm", "elm", "--"),
    ".gleam": ("Gleam", "gleam", "//"),
    ".rkt": ("Racket", "racket", ";"),
    ".scm": ("Scheme", "scheme", ";"),
    ".lisp": ("Common Lisp", "lisp", ";"),
    ".cl": ("Common Lisp", "lisp", ";"),
    # scripting
    ".sh": ("Shell", "shell", "#"),
    ".bash": ("Bash", "shell", "#"),
    ".zsh": ("Zsh", "shell", "#"),
    ".fish": ("Fish", "shell", "#"),
    ".ps1": ("PowerShell", "powershell", "#"),
    ".psm1": ("PowerShell Module", "powershell", "#"),
    ".psd1": ("PowerShell Data", "powershell", "#"),
    ".bat": ("Batch", "batch", "REM"),
    ".cmd": ("Batch", "batch", "REM"),
    ".lua": ("Lua", "lua", "--"),
    ".pl": ("Perl", "perl", "#"),
    ".pm": ("Perl Module", "perl", "#"),
    ".r": ("R", "r", "#"),
    ".rmd": ("R Markdown", "r", "#"),
    ".jl": ("Julia", "julia", "#"),
    ".tcl": ("Tcl", "tcl", "#"),
    ".awk": ("AWK", "awk", "#"),
    ".sed": ("Sed", "sed", "#"),
    ".dart": ("Dart", "dart", "//"),
    # data / config
    ".json": ("JSON", "json", None),
    ".jsonc": ("JSON with Comments", "json", "//"),
    ".json5": ("JSON5", "json", "//"),
    ".yaml": ("YAML", "yaml", "#"),
    ".yml": ("YAML", "yaml", "#"),
    ".toml": ("TOML", "toml", "#"),
    ".ini": ("INI", "ini", ";"),
    ".cfg": ("Config", "ini", "#"),
    ".conf": ("Config", "ini", "#"),
    ".env": ("Environment", "env", "#"),
    ".properties": ("Properties", "properties", "#"),
    ".csv": ("CSV", "csv", None),
    # query
    ".sql": ("SQL", "sql", "--"),
    ".graphql": ("GraphQL", "graphql", "#"),
    ".gql": ("GraphQL", "graphql", "#"),
    ".prisma": ("Prisma", "prisma", "//"),
    # docs
    ".md": ("Markdown", "markdown", None),
    ".mdx": ("MDX", "markdown", None),
    ".rst": ("reStructuredText", "rst", ".."),
    ".tex": ("LaTeX", "latex", "%"),
    ".txt": ("Plain Text", "text", None),
    ".adoc": ("AsciiDoc", "asciidoc", "//"),
    # infrastructure
    ".tf": ("Terraform", "hcl", "#"),
    ".hcl": ("HCL", "hcl", "#"),
    ".tfvars": ("Terraform Vars", "hcl", "#"),
    ".proto": ("Protocol Buffers", "proto", "//"),
    ".thrift": ("Thrift", "thrift", "//"),
    ".nix": ("Nix", "nix", "#"),
    ".dhall": ("Dhall", "dhall", "--"),
    # webassembly
    ".wat": ("WebAssembly Text", "wasm", ";;"),
    ".wast": ("WebAssembly Script", "wasm", ";;"),
    # smart contracts
    ".sol": ("Solidity", "solidity", "//"),
    ".vy": ("Vyper", "vyper", "#"),
    ".move": ("Move", "move", "//"),
    # game dev
    ".gd": ("GDScript", "gdscript", "#"),
    ".gdshader": ("Godot Shader", "shader", "//"),
    ".shader": ("Unity Shader", "shader", "//"),
    ".hlsl": ("HLSL", "shader", "//"),
    ".glsl": ("GLSL", "shader", "//"),
    ".wgsl": ("WGSL", "shader", "//"),
}

# Conventional file names that carry no (useful) extension.
_FILENAMES: dict[str, tuple[str, str, Optional[str]]] = {
    "Dockerfile": ("Dockerfile", "docker", "#"),
    "docker-compose.yml": ("Docker Compose", "yaml", "#"),
    "docker-compose.yaml": ("Docker Compose", "yaml", "#"),
    "Makefile": ("Makefile", "make", "#"),
    "GNUmakefile": ("Makefile", "make", "#"),
    "CMakeLists.txt": ("CMake", "cmake", "#"),
    "Gemfile": ("Gemfile", "ruby", "#"),
    "Rakefile": ("Rakefile", "ruby", "#"),
    "Vagrantfile": ("Vagrantfile", "ruby", "#"),
    "Cargo.toml": ("Cargo Config", "toml", "#"),
    "Cargo.lock": ("Cargo Lock", "toml", "#"),
    "go.mod": ("Go Module", "go", "//"),
    "go.sum": ("Go Checksum", "text", None),
    "package.json": ("npm Config", "json", None),
    "tsconfig.json": ("TypeScript Config", "json", None),
    "webpack.config.js": ("Webpack Config", "js", "//"),
    "vite.config.ts": ("Vite Config", "ts", "//"),
    "vite.config.js": ("Vite Config", "js", "//"),
    ".gitignore": ("Git Ignore", "gitignore", "#"),
    ".dockerignore": ("Docker Ignore", "gitignore", "#"),
    ".editorconfig": ("EditorConfig", "ini", "#"),
    ".eslintrc": ("ESLint Config", "json", None),
    ".prettierrc": ("Prettier Config", "json", None),
    "Pipfile": ("Pipfile", "toml", "#"),
    "Procfile": ("Procfile", "text", "#"),
    "Jenkinsfile": ("Jenkinsfile", "groovy", "//"),
    "justfile": ("Justfile", "make", "#"),
    "BUILD": ("Bazel", "python", "#"),
    "BUILD.bazel": ("Bazel", "python", "#"),
    "WORKSPACE": ("Bazel Workspace", "python", "#"),
    ".bazelrc": ("Bazel Config", "ini", "#"),
    "meson.build": ("Meson", "python", "#"),
    "SConstruct": ("SCons", "python", "#"),
    "SConscript": ("SCons", "python", "#"),
    "flake.nix": ("Nix Flake", "nix", "#"),
    "default.nix": ("Nix", "nix", "#"),
    "shell.nix": ("Nix Shell", "nix", "#"),
}

LANGUAGES: dict[str, LanguageDescriptor] = {
    ext: LanguageDescriptor(*row) for ext, row in _EXTENSIONS.items()
}
FILENAME_LANGUAGES: dict[str, LanguageDescriptor] = {
    name: LanguageDescriptor(*row) for name, row in _FILENAMES.items()
}

BINARY_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".png", ".jpg", ".jpeg", ".gif", ".ico", ".bmp", ".tiff", ".webp", ".avif",
        ".svg",
        ".woff", ".woff2", ".ttf", ".eot", ".otf",
        ".mp3", ".mp4", ".wav", ".avi", ".mov", ".flac", ".ogg", ".webm", ".mkv",
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        ".zip", ".tar", ".gz", ".bz2", ".rar", ".7z", ".xz", ".zst",
        ".exe", ".dll", ".so", ".dylib", ".a", ".lib", ".o", ".obj",
        ".class", ".jar", ".war", ".pyc", ".pyo", ".whl", ".egg",
        ".db", ".sqlite", ".sqlite3", ".mdb",
        ".bin", ".dat", ".iso", ".img", ".dmg",
        ".lock",
        ".map",
    }
)

LOCK_FILES: frozenset[str] = frozenset(
    {
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "composer.lock",
        "gemfile.lock",
        "pipfile.lock",
        "poetry.lock",
        "cargo.lock",
    }
)

_BUNDLE_SUFFIXES = (".min.js", ".min.css", ".bundle.js", ".chunk.js")

IGNORE_DIRS: frozenset[str] = frozenset(
    {
        "node_modules", ".git", ".svn", ".hg", ".bzr",
        "vendor", "vendors", "third_party", "3rdparty",
        "dist", "build", "out", "output", "_build", "target",
        ".next", ".nuxt", ".output", ".vercel", ".netlify",
        "__pycache__", ".pytest_cache", ".mypy_cache", ".ruff_cache",
        "venv", ".venv", "env", ".env",
        "coverage", ".nyc_output", ".coverage",
        "bin", "obj",
        ".gradle", ".idea", ".vscode", ".vs",
        ".dart_tool", ".pub-cache",
        "Pods",
        ".terraform", ".terragrunt-cache",
        "zig-cache", "zig-out",
        ".cargo",
        "elm-stuff",
        "_deps",
        "bower_components",
        ".cache", ".parcel-cache",
        "tmp", "temp",
        ".turbo",
        ".nx",
        "deps", "_opam",
    }
)


def _basename(path: str) -> str:
    return PurePosixPath(path.replace("\\", "/")).name


def classify(path: str) -> LanguageDescriptor:
    """Map *path* to its language descriptor.

    Lookup order: exact file name, compound extension (everything after the
    first dot of the base name), final extension case-insensitively, then
    the ``OTHER`` fallback.
    """
    name = _basename(path)
    hit = FILENAME_LANGUAGES.get(name)
    if hit is not None:
        return hit

    if "." in name:
        compound = "." + name.split(".", 1)[1]
        hit = LANGUAGES.get(compound)
        if hit is not None:
            return hit

    suffix = PurePosixPath(name).suffix.lower()
    return LANGUAGES.get(suffix, OTHER)


def is_binary_path(path: str) -> bool:
    """True for media, archives, compiled artifacts, lock files and bundles."""
    name = _basename(path).lower()
    if PurePosixPath(name).suffix in BINARY_EXTENSIONS:
        return True
    if name in LOCK_FILES:
        return True
    return name.endswith(_BUNDLE_SUFFIXES)


def should_ignore_dir(name: str) -> bool:
    """True for dependency, build, cache and VCS directories, and dot-dirs."""
    return name in IGNORE_DIRS or name.startswith(".")
