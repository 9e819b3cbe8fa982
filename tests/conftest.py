from __future__ import annotations

from pathlib import Path

import pytest

POEM = """\
I'm nobody! Who are you?
Are you nobody, too?
Then there's a pair of us - don't tell!
They'd banish us, you know.
How dreary to be somebody!
How public, like a frog
To tell your name the livelong day
To an admiring bog!
"""


@pytest.fixture()
def poem_path(tmp_path: Path) -> Path:
    p = tmp_path / "poem.txt"
    p.write_text(POEM, encoding="utf-8")
    return p
