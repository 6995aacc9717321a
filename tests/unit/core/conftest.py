"""Shared fixtures for core unit tests"""

import pytest

from folio.core.parse import parse_markdown


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text and a [link](https://example.com).

## Heading 2

- item one
- item two

```python
print("hello")
```

$$
E = mc^2
$$

---

Footer paragraph.
"""


@pytest.fixture(name="sample_tree")
def sample_tree_fixture():
    return parse_markdown(SAMPLE_MD)
