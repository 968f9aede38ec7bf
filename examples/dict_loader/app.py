"""DictLoader -- in-memory partials without a filesystem.

Partials come from a dictionary. Use case: tests, generated templates,
single-file apps. A standalone partial tag is indented along with it.

Run:
    python app.py
"""

from stache import DictLoader, Environment

partials = {
    "nav": """\
<nav>
{{#nav_items}}
  <a href="{{url}}">{{label}}</a>
{{/nav_items}}
</nav>
""",
    "card": """\
<div class="card">
  <h2>{{heading}}</h2>
  <p>{{message}}</p>
</div>
""",
}

page = """\
<!DOCTYPE html>
<html>
<head><title>{{title}}</title></head>
<body>
  {{>nav}}
  <main>
    {{>card}}
  </main>
</body>
</html>
"""

env = Environment(loader=DictLoader(partials))
template = env.from_string(page, name="page")

output = template.render(
    title="DictLoader Demo",
    nav_items=[
        {"url": "/", "label": "Home"},
        {"url": "/about", "label": "About"},
    ],
    heading="In-Memory Partials",
    message="No filesystem required. Partials loaded from a dict.",
)


def main() -> None:
    print(output)


if __name__ == "__main__":
    main()
