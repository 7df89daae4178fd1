from pathlib import Path

import pytest

from postkit.config import Settings, get_settings
from postkit.corpus.store import ContentStore


VUE_COMPONENTS = """\
---
layout: post
title: Vue Single File Components
---
Single file components keep template, script and style together.

```javascript
export default {
  data() {
    return { count: 0 }
  }
}
```

{% highlight html %}
<template><button @click="count++">{{ count }}</button></template>
{% endhighlight %}
"""

LARAVEL_COLLECTIONS = """\
---
layout: post
title: "Laravel Collections: map vs each"
---
Collections make array work pleasant.

<!--more-->

```php
$names = $users->map(fn ($user) => $user->name);
```

Use `each` when you only need side effects.
"""

ELOQUENT_SCOPES = """\
---
layout: post
title: Eloquent Query Scopes
---
Local scopes let you reuse query constraints.
<!--more-->
```php
public function scopeActive($query)
{
    return $query->where('active', 1);
}
```
"""

ELOQUENT_SCOPES_REPUBLISHED = """\
---
layout: post
title: Eloquent Query Scopes
---
Local scopes let you reuse common query constraints across your app.
<!--more-->
Global scopes are covered in a later post.
"""

BROKEN = """\
Just some notes without any front matter.
"""


def write_post(directory: Path, name: str, text: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "_posts"
    write_post(directory, "2018-02-10-laravel-collections.md", LARAVEL_COLLECTIONS)
    write_post(directory, "2018-01-05-vue-components.markdown", VUE_COMPONENTS)
    write_post(directory, "2019-06-01-eloquent-scopes.md", ELOQUENT_SCOPES)
    write_post(directory, "2019-06-20-eloquent-query-scopes.md", ELOQUENT_SCOPES_REPUBLISHED)
    write_post(directory, "2019-01-01-broken.md", BROKEN)
    write_post(directory, "notes.md", BROKEN)
    write_post(directory, "2019-03-03-image.png", "not a post")
    return directory


@pytest.fixture
def settings(posts_dir: Path) -> Settings:
    return get_settings(content_dir=posts_dir)


@pytest.fixture
def store(settings: Settings) -> ContentStore:
    return ContentStore(settings)
