"""
User Notices
============

Non-fatal, user-visible messages raised by the controllers.
"""


class Notice:
    def __init__(self, title, description, variant='default'):
        self.title = title
        self.description = description
        self.variant = variant

    def to_dict(self):
        return {'title': self.title, 'description': self.description, 'variant': self.variant}

    def __repr__(self):
        return f"Notice({self.title!r}, {self.description!r}, {self.variant!r})"


class NoticeBoard:
    """Collects notices for the current view"""

    def __init__(self):
        self.items = []

    def success(self, description):
        self.items.append(Notice('Success', description))

    def error(self, description):
        self.items.append(Notice('Error', description, 'destructive'))

    def deny(self, description):
        self.items.append(Notice('Access Denied', description, 'destructive'))

    @property
    def has_errors(self):
        return any(n.variant == 'destructive' for n in self.items)

    def drain(self):
        """Return and clear pending notices as dicts"""
        items, self.items = self.items, []
        return [n.to_dict() for n in items]
