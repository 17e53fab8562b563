"""
Permission-filtered navigation tree.

The left navigation is two levels deep: GLinks (parents) holding PLinks
(children). Both levels are filtered through menu_access, and the tree
reports which parents should start expanded for the page being viewed.
"""
from .core_config import NAVIGATION_EXCLUDED_MENUS
from .menu_access import get_menu_permission_levels, menu_has_any_permission
from .models import Menu


def _node(menu, user, parent=None, children=None):
    return {
        'id': menu.id,
        'name': menu.name,
        'label': menu.label,
        'icon': menu.icon or None,
        'route': menu.route or None,
        'sort_order': menu.sort_order,
        'menu_type': menu.menu_type,
        'permissions': get_menu_permission_levels(user, menu.name, parent.name if parent else None),
        'children': children if children is not None else [],
    }


def build_menu_tree(user, menus=None):
    """
    Build the navigation tree visible to a user.

    Args:
        user: CustomUser
        menus: Optional iterable of Menu objects (defaults to all menus)

    Returns:
        List of GLink nodes sorted by sort_order, each with its visible
        PLinks under 'children'.
    """
    if menus is None:
        menus = Menu.objects.all()
    menus = list(menus)

    parents = sorted(
        (
            m for m in menus
            if m.menu_type == Menu.MenuType.GLINK
            and m.is_active
            and m.name not in NAVIGATION_EXCLUDED_MENUS
            and menu_has_any_permission(user, m.name)
        ),
        key=lambda m: m.sort_order,
    )

    tree = []
    for parent in parents:
        children = sorted(
            (
                m for m in menus
                if m.menu_type == Menu.MenuType.PLINK
                and m.is_active
                and m.parent_id == parent.id
                and menu_has_any_permission(user, m.name, parent.name)
            ),
            key=lambda m: m.sort_order,
        )
        tree.append(_node(
            parent,
            user,
            children=[_node(child, user, parent=parent) for child in children],
        ))
    return tree


def _matches_section(node, active_section):
    return bool(active_section) and active_section in (str(node['id']), node['name'])


def _in_path(value, current_path):
    return bool(value) and bool(current_path) and str(value) in current_path


def find_expanded_parents(tree, active_section=None, current_path=''):
    """
    Return the ids of parent nodes that should be auto-expanded.

    Rules are tried in order and the first one that matches wins:
    1. a child whose id or name equals the active section
    2. a child whose route, name or id appears in the current path
    3. a parent whose id or name equals the active section, or whose route
       appears in the current path
    """
    for parent in tree:
        if any(_matches_section(child, active_section) for child in parent['children']):
            return {parent['id']}

    for parent in tree:
        for child in parent['children']:
            if any(_in_path(value, current_path) for value in (child['route'], child['name'], child['id'])):
                return {parent['id']}

    for parent in tree:
        if _matches_section(parent, active_section) or _in_path(parent['route'], current_path):
            return {parent['id']}

    return set()
