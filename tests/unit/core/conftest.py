"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_MD = """\
Intro with **bold** and *italic* text.

- item one
- item two

```python
print("hello")
```

> quoted *line*

Closing ~~old~~ paragraph.
"""


@pytest.fixture(name="sample_body")
def sample_body_fixture():
    return SAMPLE_MD
