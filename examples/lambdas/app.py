"""Lambdas and call expressions -- Python callables in templates.

A callable used as a section receives the raw section text and a
``render`` function that renders text against the current context. Its
return value is written as-is. Callables can also be invoked directly
from a tag with arguments.

Run:
    python app.py
"""

from dataclasses import dataclass, field

from stache import Environment


@dataclass
class Order:
    number: int
    items: list[str] = field(default_factory=list)
    total: float = 0.0

    def item_count(self) -> int:
        return len(self.items)


def bold(text, render):
    return f"<b>{render(text)}</b>"


def raw_text(text, render):
    return text


def money(amount, currency):
    return f"{amount:.2f} {currency}"


env = Environment()

template = env.from_string(
    "{{#bold}}Order #{{order.number}} for {{name}}{{/bold}}: "
    "{{order.item_count}} items, {{money(order.total, 'EUR')}}"
)

context = {
    "name": "Ada & Bob",
    "order": Order(number=42, items=["tea", "scones"], total=12.5),
    "bold": bold,
    "money": money,
}

output = template.render(context)

# The section text is handed over untouched
unrendered = env.from_string("{{#raw_text}}{{name}} stays a tag{{/raw_text}}").render(
    raw_text=raw_text
)


def main() -> None:
    print(output)
    print(unrendered)


if __name__ == "__main__":
    main()
