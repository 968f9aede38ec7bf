"""Layouts -- wrap a page in a shared shell.

``render_in_layout()`` renders the page first, then renders the layout
with the page's output available as ``content``. Use ``{{{content}}}`` so
the page's HTML is not escaped a second time.

Run:
    python app.py
"""

import io

from stache import Environment

env = Environment()

layout = env.from_string(
    "<html><head><title>{{title}}</title></head>"
    "<body>{{{content}}}</body></html>",
    name="layout",
)
page = env.from_string("<h1>{{title}}</h1><p>{{body}}</p>", name="page")

output = page.render_in_layout(layout, {"title": "Layouts", "body": "Fish & chips"})

# Stream into any object with a write() method
stream = io.StringIO()
page.render_in_layout_to(stream, layout, title="Streamed", body="Straight to the buffer")
streamed = stream.getvalue()


def main() -> None:
    print(output)
    print(streamed)


if __name__ == "__main__":
    main()
