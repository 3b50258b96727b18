"""Shared fixtures: a small on-disk catalog and an empty project."""

import pytest

from blue_gardener.core.catalog import Catalog
from blue_gardener.output import get_output

REVIEWER = """\
---
name: blue-code-reviewer
description: Reviews code changes.
category: quality
tags: [review, quality]
---

You are a careful reviewer. Your feedback is specific.

## When Invoked

- A pull request is ready

## Core Responsibilities

1. Check correctness.

```python
## not a heading
print("inside a fence")
```

## Delegation Guidelines

- Ask @blue-api-designer about endpoints.

## Output Format

A list of findings.
"""

DESIGNER = """\
---
name: blue-api-designer
description: Designs HTTP APIs.
category: development
tags: [api, rest]
---

You design APIs. Delegate to @blue-code-reviewer when done.

## When Invoked

- An endpoint is needed

### Details

Versioned routes only.
"""


@pytest.fixture(autouse=True)
def reset_output():
    """Keep verbosity and colour settings from leaking between tests."""
    output = get_output()
    output.verbosity = 0
    output.use_color = False
    yield


@pytest.fixture
def catalog_dir(tmp_path):
    directory = tmp_path / "catalog"
    (directory / "quality").mkdir(parents=True)
    (directory / "development").mkdir(parents=True)
    (directory / "quality" / "blue-code-reviewer.md").write_text(REVIEWER)
    (directory / "development" / "blue-api-designer.md").write_text(DESIGNER)
    return directory


@pytest.fixture
def catalog(catalog_dir):
    return Catalog(catalog_dir)


@pytest.fixture
def project(tmp_path):
    directory = tmp_path / "project"
    directory.mkdir()
    return directory
