"""
Skills Controller
=================

Skills are listed by (category, order_index) and shown grouped by category.
"""

from ...core.controller import EntityController
from .models import Skill, SkillWrite

DEFAULT_PROFICIENCY = 80


def group_by_category(skills):
    """Insertion-ordered {category: [skills]}; categories in first-seen order,
    members in the given order."""
    groups = {}
    for skill in skills:
        groups.setdefault(skill.category, []).append(skill)
    return groups


class SkillsController(EntityController):
    collection = 'skills'
    record_model = Skill
    write_model = SkillWrite
    form_fields = ('name', 'category', 'proficiency', 'order_index')
    order_by = (('category', True), ('order_index', True))
    label = 'skill'
    plural = 'skills'

    def empty_form(self):
        return {'name': '', 'category': '', 'proficiency': DEFAULT_PROFICIENCY, 'order_index': 0}

    def to_payload(self, form):
        proficiency = form.get('proficiency')
        return {
            'name': form.get('name') or '',
            'category': form.get('category') or '',
            'proficiency': DEFAULT_PROFICIENCY if proficiency in (None, '') else proficiency,
            'order_index': form.get('order_index') or 0,
        }

    @property
    def grouped(self):
        # Derived from the current mirror on every access
        return group_by_category(self.items)

    def view(self):
        view = super().view()
        view['grouped'] = {
            category: [skill.model_dump() for skill in members]
            for category, members in self.grouped.items()
        }
        return view
