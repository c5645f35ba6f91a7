"""
Projects Controller
===================

Mirror and form state for the projects collection, with image upload
into the pending form.
"""

from ...core.controller import EntityController, ImageAttachmentMixin
from ...core.forms import blank_to_none, split_list
from .models import Project, ProjectWrite


class ProjectsController(ImageAttachmentMixin, EntityController):
    collection = 'projects'
    record_model = Project
    write_model = ProjectWrite
    form_fields = (
        'title', 'description', 'long_description', 'image_url',
        'tech_stack', 'live_url', 'github_url', 'featured', 'order_index',
    )
    order_by = (('order_index', True),)
    label = 'project'
    plural = 'projects'
    image_namespace = 'projects'

    def empty_form(self):
        form = super().empty_form()
        form['featured'] = False
        form['order_index'] = 0
        return form

    def to_payload(self, form):
        return {
            'title': form.get('title') or '',
            'description': form.get('description') or '',
            'long_description': blank_to_none(form.get('long_description')),
            'image_url': blank_to_none(form.get('image_url')),
            'tech_stack': split_list(form.get('tech_stack')),
            'live_url': blank_to_none(form.get('live_url')),
            'github_url': blank_to_none(form.get('github_url')),
            'featured': form.get('featured') or False,
            'order_index': form.get('order_index') or 0,
        }

    @property
    def featured(self):
        return [project for project in self.items if project.featured]
