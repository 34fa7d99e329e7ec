"""Compute-once attributes for document records"""


class memoized:
    """Cache a method's result on the instance the first time it is read.

    The owner must set ``_memo`` (dict) and ``_memo_lock`` (RLock) in
    ``__init__``. With ``tracks_data`` the cached value is recomputed after
    ``instance.data.revision`` changes.
    """

    def __init__(self, func=None, *, tracks_data: bool = False):
        self.func = func
        self.tracks_data = tracks_data
        if func is not None:
            self.__doc__ = func.__doc__

    def __call__(self, func):
        self.func = func
        self.__doc__ = func.__doc__
        return self

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        revision = obj.data.revision if self.tracks_data else None
        hit = obj._memo.get(self.name)
        if hit is not None and hit[0] == revision:
            return hit[1]
        with obj._memo_lock:
            hit = obj._memo.get(self.name)
            if hit is not None and hit[0] == revision:
                return hit[1]
            value = self.func(obj)
            if self.tracks_data:
                revision = obj.data.revision
            obj._memo[self.name] = (revision, value)
            return value
