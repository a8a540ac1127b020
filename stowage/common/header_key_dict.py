# Copyright (c) 2026 OpenStack Foundation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.


class HeaderKeyDict(dict):
    """
    A dict of HTTP headers with case-insensitive keys.

    Unlike a plain dict, lookups ignore the case of the key, and the
    spelling used the first time a header is set is the one kept for the
    wire. Insertion order is preserved. Values are stored as native
    strings; setting a header to None removes it.
    """
    def __init__(self, base_headers=None, **kwargs):
        dict.__init__(self)
        self._names = {}
        if base_headers:
            self.update(base_headers)
        self.update(kwargs)

    def _key(self, key):
        return self._names.get(key.lower(), key)

    def update(self, other=(), **kwargs):
        if hasattr(other, 'keys'):
            for key in other.keys():
                self[key] = other[key]
        else:
            for key, value in other:
                self[key] = value
        for key, value in kwargs.items():
            self[key] = value

    def __getitem__(self, key):
        return dict.get(self, self._key(key))

    def __setitem__(self, key, value):
        if value is None:
            self.pop(key, None)
            return
        if isinstance(value, bytes):
            value = value.decode('latin-1')
        else:
            value = str(value)
        key = self._key(key)
        self._names[key.lower()] = key
        dict.__setitem__(self, key, value)

    def __contains__(self, key):
        return dict.__contains__(self, self._key(key))

    def __delitem__(self, key):
        key = self._key(key)
        dict.__delitem__(self, key)
        del self._names[key.lower()]

    def get(self, key, default=None):
        return dict.get(self, self._key(key), default)

    def setdefault(self, key, value=None):
        if key not in self:
            self[key] = value
        return self[key]

    def pop(self, key, *default):
        key = self._key(key)
        self._names.pop(key.lower(), None)
        return dict.pop(self, key, *default)

    def copy(self):
        return HeaderKeyDict(self)

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, dict.__repr__(self))


def merge_headers(*sources):
    """
    Merge header collections into a new :class:`HeaderKeyDict`.

    Later sources win; a header that appears in several sources keeps the
    position and spelling of its first appearance. None of the sources are
    modified.

    :param sources: mappings or iterables of (name, value) pairs; None
                    entries are skipped
    :returns: a new HeaderKeyDict
    """
    merged = HeaderKeyDict()
    for source in sources:
        if source:
            merged.update(source)
    return merged
