"""Template introspection -- looking inside a compiled template.

Demonstrates tags(), partial_names(), required_context() and
validate_context(). These let you check a context before rendering
without executing the template.

Run:
    python app.py
"""

from stache import Environment

source = """\
<h1>{{page.title}}</h1>
{{^page.published}}<p class="draft">Draft</p>{{/page.published}}
{{#page.tags}}<span>{{.}}</span>{{/page.tags}}
{{>footer}}
{{! comments leave no tag behind }}
<small>{{site_name}}</small>
"""

env = Environment()
template = env.from_string(source, name="page")

# Top-level tags, in source order
tags = [(tag.tag_type.name, tag.name) for tag in template.tags()]

# Tags inside the tags section
section_tags = [(tag.tag_type.name, tag.name) for tag in template.tags()[2].tags()]

# Which partials would be loaded?
partials = template.partial_names()

# What does this template look up on the caller's context?
required = template.required_context()

# Validate contexts before rendering
missing_vars = template.validate_context({"page": {"title": "Test"}})
no_missing = template.validate_context({"page": {}, "site_name": "My Site"})

lines = [
    f"Tags: {tags}",
    f"Section tags: {section_tags}",
    f"Partials: {sorted(partials)}",
    f"Required context: {sorted(required)}",
    f"Missing (partial): {missing_vars}",
    f"Missing (complete): {no_missing}",
]
output = "\n".join(lines)


def main() -> None:
    print("=== Template Introspection ===\n")
    for line in lines:
        print(f"  {line}")


if __name__ == "__main__":
    main()
