"""File-based templates -- the most common real-world pattern.

Loads templates and partials from disk with FileSystemLoader. Names are
given without extension; ``.mustache`` and ``.stache`` files are found
automatically.

Run:
    python app.py
"""

from pathlib import Path

from stache import Environment, FileSystemLoader

templates_dir = Path(__file__).parent / "templates"
env = Environment(loader=FileSystemLoader(templates_dir))

nav_items = [
    {"url": "/", "label": "Home"},
    {"url": "/about", "label": "About"},
]

home_template = env.get_template("home")
about_template = env.get_template("about")

home_output = home_template.render(
    site_name="My Site",
    nav_items=nav_items,
    title="Welcome",
    message="This is a stache-powered site built from partials.",
)

about_output = about_template.render(
    site_name="My Site",
    nav_items=nav_items,
    title="About Us",
    description="Logic-less templates, rendered from plain Python data.",
)


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print("=== About Page ===")
    print(about_output)


if __name__ == "__main__":
    main()
