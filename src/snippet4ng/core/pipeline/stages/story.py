from __future__ import annotations

"""
Storybook Story Rendering.

Produces the CSF3 story file that shows a generated component inside the
module that declares it.
"""

_STORY_TEMPLATE = """import type {{ Meta, StoryObj }} from '@storybook/angular';
import {{ moduleMetadata }} from '@storybook/angular';
import {{ CommonModule }} from '@angular/common';
import {{ {component} }} from './{leaf_name}.component';
import {{ {module} }} from '{module_path}';

const meta: Meta<{component}> = {{
  title: '{title}',
  component: {component},
  decorators: [
    moduleMetadata({{
      imports: [CommonModule, {module}],
    }}),
  ],
}};
export default meta;

type Story = StoryObj<{component}>;

export const Default: Story = {{
  args: {{}},
}};
"""


def render_story(
        component: str,
        leaf_name: str,
        module: str,
        module_path: str,
        title: str,
) -> str:
    """
    Render the story source for a component.

    Args:
        component: Component class name.
        leaf_name: Component file stem.
        module: Nearest enclosing module class name.
        module_path: Import specifier of that module from the component directory.
        title: Storybook breadcrumb title.

    Returns:
        str: TypeScript source of the story file.
    """
    return _STORY_TEMPLATE.format(
        component=component,
        leaf_name=leaf_name,
        module=module,
        module_path=module_path,
        title=_escape_single_quoted(title),
    )


def _escape_single_quoted(text: str) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'")
