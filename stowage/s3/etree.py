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

"""
XML request bodies (multi-object delete and friends), built with lxml.
"""

from copy import deepcopy

import lxml.etree

from stowage.common.exceptions import ValidationError
from stowage.s3.operations import BUCKET_OPS_MAX

XMLNS_S3 = 'http://s3.amazonaws.com/doc/2006-03-01/'


def _utf8decode(s):
    if isinstance(s, bytes):
        s = s.decode('utf8')
    return s


class _Element(lxml.etree.ElementBase):
    """
    Element whose text may also be set from utf-8 encoded bytes, so object
    keys can be used as given by the caller.
    """
    @property
    def text(self):
        return lxml.etree.ElementBase.text.__get__(self)

    @text.setter
    def text(self, value):
        lxml.etree.ElementBase.text.__set__(self, _utf8decode(value))


parser_lookup = lxml.etree.ElementDefaultClassLookup(element=_Element)
parser = lxml.etree.XMLParser(resolve_entities=False, no_network=True)
parser.set_element_class_lookup(parser_lookup)

Element = parser.makeelement
SubElement = lxml.etree.SubElement


def tostring(tree, use_s3ns=True, xml_declaration=True):
    if use_s3ns:
        nsmap = tree.nsmap.copy()
        nsmap[None] = XMLNS_S3

        root = Element(tree.tag, attrib=tree.attrib, nsmap=nsmap)
        root.text = tree.text
        root.extend(deepcopy(list(tree)))
        tree = root

    return lxml.etree.tostring(tree, xml_declaration=xml_declaration,
                               encoding='UTF-8')


def build_delete_body(keys, quiet=False):
    """
    Build the body of a multi-object delete request.

    :param keys: object keys; an entry may also be a (key, version_id) tuple
    :param quiet: ask the service to report only failures
    :returns: the XML document as bytes
    :raises ValidationError: if there are no keys or more than
                             BUCKET_OPS_MAX of them
    """
    keys = list(keys)
    if not keys:
        raise ValidationError('At least one key is required for a '
                              'multi-object delete', 'delete_multiple')
    if len(keys) > BUCKET_OPS_MAX:
        raise ValidationError(
            'A multi-object delete is limited to %d keys, got %d; split the '
            'keys into batches' % (BUCKET_OPS_MAX, len(keys)),
            'delete_multiple')

    elem = Element('Delete')
    if quiet:
        SubElement(elem, 'Quiet').text = 'true'
    for entry in keys:
        if isinstance(entry, tuple):
            key, version_id = entry
        else:
            key, version_id = entry, None
        obj = SubElement(elem, 'Object')
        SubElement(obj, 'Key').text = key
        if version_id:
            SubElement(obj, 'VersionId').text = version_id
    return tostring(elem)


def build_create_bucket_body(location):
    """
    Body of a bucket creation request outside the default region.

    :param location: the region to create the bucket in
    :returns: the XML document as bytes
    """
    elem = Element('CreateBucketConfiguration')
    SubElement(elem, 'LocationConstraint').text = location
    return tostring(elem)
