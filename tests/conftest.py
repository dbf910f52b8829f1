"""Pytest configuration and shared fixtures."""
import json
from pathlib import Path
from uuid import UUID

import pytest

from chatscope.transcript import ServerTurn, UserTurn, load_transcript

QUERY_A = UUID("6f1c2a9e-3b4d-4c8e-9f10-2a3b4c5d6e7f")
QUERY_B = UUID("0d9e8f7a-6b5c-4d3e-8f2a-1b0c9d8e7f6a")


@pytest.fixture
def query_ids():
    """Return the query ids used by the sample transcript."""
    return QUERY_A, QUERY_B


@pytest.fixture
def sample_answer():
    """Return an assistant answer with every kind of code element."""
    return '''The entry point parses arguments first:

```type:Quoted,lang:rust,path:src/main.rs,lines:10-12
fn main() {
    let args = Args::parse();
}
```

A plain snippet:

```python
print("hello")
```

The accent color is `#89b4fa` and the config key is `theme`.

    indented block
'''


@pytest.fixture
def sample_transcript(sample_answer):
    """Return a finished two-exchange transcript."""
    return (
        UserTurn(text="Where is main?"),
        ServerTurn(
            text="Searching...",
            query_id=QUERY_A,
            results="It is in `src/main.rs`.",
        ),
        UserTurn(text="Show me the argument parsing"),
        ServerTurn(text=sample_answer, query_id=QUERY_B),
    )


@pytest.fixture
def sample_transcript_file(tmp_path):
    """Write a transcript JSON file and return its path."""
    data = [
        {"author": "user", "text": "How are routes registered?"},
        {
            "author": "server",
            "text": "Routes are added in `router.py`.",
            "query_id": str(QUERY_A),
            "loading_steps": [
                {"type": "query", "content": "route registration"},
                {"type": "proc", "content": "src/router.py"},
            ],
            "response_timestamp": "2024-05-01T12:30:00",
        },
    ]
    path = tmp_path / "transcript.json"
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def loaded_transcript(sample_transcript_file: Path):
    """Return the transcript stored in ``sample_transcript_file``."""
    return load_transcript(sample_transcript_file.read_bytes())
