"""Hello World -- the simplest stache example.

Compile a template from a string and render it with context values.
No templates directory needed.

Run:
    python app.py
"""

from stache import Environment

env = Environment()

# Compile once
template = env.from_string("Hello, {{name}}!")

# Render many times
output = template.render(name="World")

# Un-prefixed tags are HTML-escaped; triple mustaches are not
escaped = env.from_string("{{snippet}} vs {{{snippet}}}").render(snippet="<b>hi</b>")


def main() -> None:
    print(output)
    print(escaped)
    print()

    for name in ["Ada", "Grace", "Linus"]:
        print(template.render({"name": name}))


if __name__ == "__main__":
    main()
