# tests/architecture/test_architecture.py
# Architecture tests enforcing layering rules.
# - the library does no I/O: no web, database, cache or HTTP client imports
# - schemas and utils stay below services
# - constants is a leaf module
#
# The tests are resilient: if a package is absent they will skip instead of failing.

import ast
import pathlib

import pytest  # type: ignore[import-not-found]

REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
PACKAGE = "callmetrics"

IO_LIBRARIES = {
    "tornado", "fastapi", "starlette", "sqlalchemy", "asyncpg", "psycopg2",
    "redis", "requests", "httpx", "aiohttp", "alembic",
}


def _pkg_path(*parts: str) -> pathlib.Path | None:
    p = REPO_ROOT.joinpath(*parts)
    return p if p.exists() and p.is_dir() else None


def _iter_py_files(root: pathlib.Path):
    for path in root.rglob("*.py"):
        # skip virtualenv & build outputs
        parts = {"venv", ".venv", "node_modules", "__pycache__"}
        if any(part in parts for part in path.parts):
            continue
        yield path


def _collect_imports(py_path: pathlib.Path, depth: int = 1) -> set[str]:
    """Return set of imported module names from file, cut to `depth` parts."""
    try:
        src = py_path.read_text(encoding="utf-8")
    except Exception:
        return set()
    try:
        tree = ast.parse(src, filename=str(py_path))
    except SyntaxError:
        return set()
    imports: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.add(".".join(alias.name.split(".")[:depth]))
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                imports.add(".".join(node.module.split(".")[:depth]))
    return imports


# ---------- Tests ----------

@pytest.mark.architecture
def test_library_does_not_import_io_stacks():
    root = _pkg_path(PACKAGE)
    if not root:
        pytest.skip("No callmetrics package in repo; skipping")

    offenders = []
    for f in _iter_py_files(root):
        bad = _collect_imports(f) & IO_LIBRARIES
        if bad:
            offenders.append(f"{f}: {sorted(bad)}")
    assert not offenders, "callmetrics must stay I/O free; offending files:\n" + "\n".join(offenders)


@pytest.mark.architecture
@pytest.mark.parametrize("layer", ["schemas", "utils"])
def test_lower_layers_do_not_import_services(layer):
    root = _pkg_path(PACKAGE, layer)
    if not root:
        pytest.skip(f"No {layer} package; skipping")

    for f in _iter_py_files(root):
        imports = _collect_imports(f, depth=2)
        assert f"{PACKAGE}.services" not in imports, f"{layer} must not depend on services: {f}"


@pytest.mark.architecture
def test_constants_is_a_leaf():
    constants = REPO_ROOT / PACKAGE / "constants.py"
    if not constants.exists():
        pytest.skip("No constants module; skipping")

    assert PACKAGE not in _collect_imports(constants), "constants must not import the package"
