"""Publish policy: unpublished and future-dated documents"""

from sitedoc.core.utils.dates import epoch_seconds


class Publisher:
    def __init__(self, site):
        self.site = site

    def publish(self, doc) -> bool:
        return self.can_be_published(doc) and not self.hidden_in_the_future(doc)

    def can_be_published(self, doc) -> bool:
        return doc.data.get("published", True) is not False or self.site.config.unpublished

    def hidden_in_the_future(self, doc) -> bool:
        """True when doc is dated after site time and future documents are off."""
        if self.site.config.future:
            return False
        try:
            return epoch_seconds(doc.date) > epoch_seconds(self.site.time)
        except (TypeError, ValueError, OverflowError):
            return False
