import pathlib

import pytest

tomllib = pytest.importorskip('tomllib')

ROOT = pathlib.Path(__file__).resolve().parent.parent


def _declared_dependencies():
    with open(ROOT / 'pyproject.toml', 'rb') as f:
        project = tomllib.load(f)['project']
    return {dep.split('>')[0].split('=')[0].strip().lower() for dep in project['dependencies']}


def test_directly_imported_libraries_are_declared():
    declared = _declared_dependencies()
    for name in ('flask', 'flask-cors', 'python-dotenv', 'requests', 'werkzeug', 'markdown', 'markupsafe'):
        assert name in declared
