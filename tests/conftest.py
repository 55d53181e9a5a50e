"""Pytest configuration for phased testing.

Tests are organized by phase (f1, f2, ..., f5).
Only tests for the current phase and completed phases should run.
Future phase tests are automatically skipped.

Shared fixtures build a small curriculum in tmp_path and point
ACADEMY_DATA_DIR at it, so no test reads the repository's data/.
"""

from pathlib import Path

import pytest

from academy.config.app_config import clear_config_cache
from academy.config.sections import clear_sections_cache

# Current implementation phase
CURRENT_PHASE = 5


def pytest_collection_modifyitems(config, items):
    """Skip tests from phases that haven't been implemented yet."""
    for item in items:
        # Extract phase from path (tests/f2/... -> 2)
        parts = item.fspath.strpath.split("/")
        for part in parts:
            if part.startswith("f") and part[1:].isdigit():
                test_phase = int(part[1:])
                if test_phase > CURRENT_PHASE:
                    item.add_marker(
                        pytest.mark.skip(
                            reason=f"Phase F{test_phase} not yet implemented (current: F{CURRENT_PHASE})"
                        )
                    )
                break


# Section -> {slug: file text}
SAMPLE_TOPICS = {
    "basics": {
        "intro": """---
title: Platform Intro
order: 1
difficulty: beginner
examWeight: low
description: What a Salesforce org is.
concepts: [org]
---

# Core Concepts

Orgs hold metadata.
""",
    },
    "apex": {
        "variables": """---
title: Variables and Data Types
order: 1
difficulty: beginner
examWeight: high
readTime: 8 min
description: Primitive types in Apex.
concepts: [primitives, collections]
prerequisites: [intro]
relatedTopics: [triggers]
lastUpdated: 2024-02-01
---

# Core Concepts

Every variable has a declared type.

## Primitives

```js
let count = 5;
```
""",
        "loops": """---
title: Loops
order: 2
difficulty: intermediate
examWeight: medium
description: Iterating in Apex.
concepts: [collections]
prerequisites: [variables]
---

# Code Examples

A for loop walks a list.
""",
        "triggers": """---
title: Triggers
order: 3
difficulty: advanced
examWeight: high
description: Running code on DML events.
concepts: [dml]
prerequisites: [loops, missing-topic]
---

# Common Gotchas

> ⚠️ WARNING: Bulkify every trigger.
""",
    },
    "lwc": {
        "components": """---
title: Component Basics
order: 1
difficulty: beginner
examWeight: medium
description: Anatomy of a component.
concepts: [decorators]
---

# Core Concepts

A component is a folder.
""",
    },
}

# Category -> {slug: file text}
SAMPLE_TUTORIALS = {
    "apex": {
        "trigger-framework": """---
title: Trigger Framework
difficulty: intermediate
description: One trigger per object.
tags: [triggers, patterns]
lastUpdated: 2024-03-01
featured: true
---

# Why

Keep triggers thin.
""",
        "batch-jobs": """---
title: Batch Jobs
difficulty: advanced
description: Database.Batchable in practice.
tags: [async]
lastUpdated: 2024-01-01
---

# Methods

start, execute, finish.
""",
    },
    "lwc": {
        "datatable": """---
title: Datatable
difficulty: beginner
description: Tables of records.
tags: [ui, patterns]
featured: true
---

# Columns

Define columns.
""",
    },
}


def write_content(content_dir: Path, kind: str, files: dict[str, dict[str, str]]) -> None:
    """Write {group: {slug: text}} under content_dir/kind/group/slug.md."""
    for group, entries in files.items():
        group_dir = content_dir / kind / group
        group_dir.mkdir(parents=True, exist_ok=True)
        for slug, text in entries.items():
            (group_dir / f"{slug}.md").write_text(text, encoding="utf-8")


@pytest.fixture(autouse=True)
def _clear_caches():
    """Config caches must not leak between tests."""
    clear_config_cache()
    clear_sections_cache()
    yield
    clear_config_cache()
    clear_sections_cache()


@pytest.fixture
def data_dir(tmp_path, monkeypatch) -> Path:
    """Isolated data directory with the sample curriculum."""
    data = tmp_path / "data"
    content = data / "content"
    write_content(content, "topics", SAMPLE_TOPICS)
    write_content(content, "tutorials", SAMPLE_TUTORIALS)
    (data / "state").mkdir(parents=True)

    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ACADEMY_DATA_DIR", str(data))
    return data


@pytest.fixture
def content_dir(data_dir) -> Path:
    """Content directory of the sample curriculum."""
    return data_dir / "content"
