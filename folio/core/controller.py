"""
Entity Controllers
==================

Shared orchestration for the admin collections: a read-through mirror of the
stored records, a staged text form, and submit/remove flows against the
record store. Failures never propagate out of an operation; they are logged
and raised as a destructive notice while the mirror keeps its last good state.

Load:  IDLE -> LOADING -> READY
Form:  CLOSED -> EDITING_NEW | EDITING_EXISTING -> SUBMITTING -> CLOSED
"""

import inspect
from enum import Enum

from .errors import FolioError, NotFoundError
from .forms import flatten
from .logging_service import LoggingService
from .storage import unique_filename


class LoadState(Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    READY = 'ready'


class FormMode(Enum):
    CLOSED = 'closed'
    EDITING_NEW = 'editing_new'
    EDITING_EXISTING = 'editing_existing'
    SUBMITTING = 'submitting'


async def _resolve(value):
    if inspect.isawaitable(value):
        return await value
    return value


class EntityController:
    """Base controller for one collection"""

    collection = None
    record_model = None
    write_model = None
    form_fields = ()
    order_by = ()
    label = 'record'
    plural = 'records'

    def __init__(self, data, notices, storage=None):
        self.data = data
        self.notices = notices
        self.storage = storage
        self.items = []
        self.state = LoadState.IDLE
        self.form_mode = FormMode.CLOSED
        self.editing_id = None
        self.form = self.empty_form()
        self.last_error = None

    @property
    def loading(self):
        return self.state is LoadState.LOADING

    def empty_form(self):
        return {field: '' for field in self.form_fields}

    def to_payload(self, form):
        """Write body for the staged form"""
        raise NotImplementedError

    def get(self, record_id):
        return next((item for item in self.items if item.id == record_id), None)

    def _report(self, message, error):
        self.last_error = error
        LoggingService.error(self.collection, message, {'error': str(error), 'type': type(error).__name__})

    # ===== Load =====

    async def _fetch(self):
        rows = await self.data.list(self.collection, order_by=self.order_by)
        return self.record_model.ingest_many(rows)

    def _apply(self, fetched):
        self.items = fetched

    async def load(self):
        """Replace the mirror with the stored collection. Returns False on failure.

        READY means the load has settled, not that it succeeded: a failed first
        load ends READY with the empty mirror it started with.
        """
        self.last_error = None
        self.state = LoadState.LOADING
        try:
            fetched = await self._fetch()
        except FolioError as e:
            self._report(f"Failed to load {self.plural}", e)
            self.notices.error(f"Failed to load {self.plural}")
            return False
        finally:
            self.state = LoadState.READY
        self._apply(fetched)
        return True

    # ===== Form =====

    def begin_create(self):
        self.form = self.empty_form()
        self.editing_id = None
        self.form_mode = FormMode.EDITING_NEW

    def begin_edit(self, record_id):
        record = self.get(record_id)
        if record is None:
            raise NotFoundError(f"No {self.label} with id {record_id}")
        self.form = flatten(record.model_dump(), self.form_fields)
        self.editing_id = record_id
        self.form_mode = FormMode.EDITING_EXISTING

    def update_form(self, values):
        """Stage edited values; names outside the form are ignored"""
        for field, value in values.items():
            if field in self.form_fields:
                self.form[field] = value

    def close(self):
        self.form = self.empty_form()
        self.editing_id = None
        self.form_mode = FormMode.CLOSED

    # ===== Submit / remove =====

    async def _write(self, payload, mode):
        """Send *payload* to the store; returns the past-tense verb for the notice"""
        if mode is FormMode.EDITING_EXISTING:
            await self.data.update(self.collection, self.editing_id, payload)
            return 'updated'
        await self.data.insert(self.collection, payload)
        return 'created'

    async def submit(self):
        """Write the staged form. On success the form closes and the mirror is reloaded."""
        mode = self.form_mode
        if mode is FormMode.SUBMITTING:
            return False
        self.last_error = None
        self.form_mode = FormMode.SUBMITTING
        try:
            payload = self.write_model.build(self.to_payload(self.form))
            verb = await self._write(payload, mode)
        except FolioError as e:
            self.form_mode = mode
            self._report(f"Failed to save {self.label}", e)
            self.notices.error(str(e) or f"Failed to save {self.label}")
            return False

        self.notices.success(f"{self.label.capitalize()} {verb} successfully")
        self.close()
        await self.load()
        return True

    async def remove(self, record_id, confirm):
        """Delete after *confirm()* (sync or async) returns true, then reload"""
        self.last_error = None
        if not await _resolve(confirm()):
            return False
        try:
            await self.data.delete(self.collection, record_id)
        except FolioError as e:
            self._report(f"Failed to delete {self.label}", e)
            self.notices.error(f"Failed to delete {self.label}")
            return False

        self.notices.success(f"{self.label.capitalize()} deleted successfully")
        await self.load()
        return True

    def view(self):
        return {
            'state': self.state.value,
            'loading': self.loading,
            'items': [item.model_dump() for item in self.items],
            'form': dict(self.form),
            'form_mode': self.form_mode.value,
            'editing_id': self.editing_id,
        }


class ImageAttachmentMixin:
    """Upload an image into the staged form of an EntityController"""

    image_namespace = None
    image_field = 'image_url'

    uploading = False

    async def upload_image(self, original_name, data):
        """Store the file and stage its public URL in the form. Never writes the entity."""
        self.last_error = None
        self.uploading = True
        try:
            path = await self.storage.upload(self.image_namespace, unique_filename(original_name), data)
            url = self.storage.public_url(path)
        except FolioError as e:
            self._report("Failed to upload image", e)
            self.notices.error(str(e) or "Failed to upload image")
            return None
        finally:
            self.uploading = False

        self.form[self.image_field] = url
        self.notices.success("Image uploaded successfully")
        return url

    def view(self):
        view = super().view()
        view['uploading'] = self.uploading
        return view
