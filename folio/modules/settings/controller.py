"""
Site Settings Controller
========================

The singleton settings record. Whether a save inserts or updates is decided
by the identity cached from the last successful load: Unset -> insert,
Existing(id) -> update that id. The form is always open.
"""

from ...core.controller import EntityController, FormMode, ImageAttachmentMixin
from ...core.forms import blank_to_none, flatten
from .models import SETTINGS_FIELDS, Existing, SiteSettings, SiteSettingsWrite, Unset


class SiteSettingsController(ImageAttachmentMixin, EntityController):
    collection = 'site_settings'
    record_model = SiteSettings
    write_model = SiteSettingsWrite
    form_fields = SETTINGS_FIELDS
    label = 'site settings'
    plural = 'site settings'
    image_namespace = 'hero'
    image_field = 'hero_image_url'

    def __init__(self, data, notices, storage=None):
        super().__init__(data, notices, storage)
        self.identity = Unset()
        self.record = None

    def to_payload(self, form):
        return {field: blank_to_none(form.get(field)) for field in SETTINGS_FIELDS}

    async def _fetch(self):
        row = await self.data.get_singleton(self.collection)
        return SiteSettings.ingest(row) if row is not None else None

    def _apply(self, fetched):
        if fetched is None:
            self.items = []
            return
        self.record = fetched
        self.items = [fetched]
        self.identity = Existing(fetched.id)
        self.form = flatten(fetched.model_dump(), self.form_fields)
        self.editing_id = fetched.id

    def close(self):
        # The settings form stays populated with the stored values
        self.form_mode = FormMode.CLOSED

    async def _write(self, payload, mode):
        if isinstance(self.identity, Existing):
            await self.data.update(self.collection, self.identity.id, payload)
        else:
            stored = await self.data.insert(self.collection, payload)
            self.identity = Existing(stored['id'])
        return 'updated'

    def view(self):
        view = super().view()
        view['record'] = self.record.model_dump() if self.record else None
        view['identity'] = self.identity.id if isinstance(self.identity, Existing) else None
        return view
