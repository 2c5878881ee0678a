'''
# Tags

The tag of a data descriptor says how its payload must be interpreted. Only
a small set of tags is understood here; all the other ones are kept verbatim
as Unknown so that no data is lost.

A payload that doesn't fit the structure of its tag doesn't stop the parsing
of the file: it's reported as Corrupt with the same tag id.
'''
import logging

from ..core import Chunk
from .. import fields
from ..enum import Compliant
from ..properties import Dependency
from ..exceptions import UnpackException, CorruptTag, UnknownTag
from .enum import HDFTagType


logger = logging.getLogger(__name__)


class Tag(object):
    '''Base class for the decoded content of a data descriptor.'''
    tag_id = None


class PlaceholderTag(Tag):
    '''Tag without structure, two of them are equal if they have the same values.'''

    def _key(self):
        return ()

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented

        return self._key() == other._key()

    def __hash__(self):
        return hash((self.__class__.__name__,) + self._key())

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(repr(_) for _ in self._key()))


class Null(PlaceholderTag):
    '''Unused data descriptor, the payload (if any) is meaningless.'''
    tag_id = HDFTagType.DFTAG_NULL


class DiagnosticTag(PlaceholderTag):
    '''Placeholder remembering only the id of the tag it replaces.'''

    def __init__(self, tag):
        self.tag = tag

    @property
    def tag_id(self):
        return self.tag

    def _key(self):
        return (self.tag,)


class Unknown(DiagnosticTag):
    '''Tag not interpreted by this library: the payload is kept as it is.'''

    def __init__(self, tag, data):
        super().__init__(tag)
        self.data = bytes(data)

    def _key(self):
        return (self.tag, self.data)


class Invalid(DiagnosticTag):
    '''Tag with offset and length outside of the file.'''


class Corrupt(DiagnosticTag):
    '''A tag of recognized type that failed to unpack.'''


class TagRef(Chunk):
    '''Pointer by value to another data descriptor of the same file: it's not
    resolved automatically, use HDFFile.resolve() for that.'''
    tag       = fields.StructField('H')
    reference = fields.StructField('H')

    def as_tuple(self):
        return (self.tag.value, self.reference.value)

    def __eq__(self, other):
        if isinstance(other, TagRef):
            other = other.as_tuple()

        return self.as_tuple() == other

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return '<%s(%d/%d)>' % (self.__class__.__name__, *self.as_tuple())


class Version(Tag, Chunk):
    '''Version of the HDF library that wrote the file, followed by a free
    text (usually NUL padded up to 80 characters).'''
    tag_id  = HDFTagType.DFTAG_VERSION

    majorv  = fields.StructField('I')
    minorv  = fields.StructField('I')
    release = fields.StructField('I')
    string  = fields.TextField()

    def __str__(self):
        return '%d.%d.%d %s' % (
            self.majorv.value,
            self.minorv.value,
            self.release.value,
            self.string.value.rstrip('\x00'),
        )


class NumberType(Tag, Chunk):
    '''Describes how the numbers of a dataset are stored: the payload is
    exactly four bytes.'''
    tag_id  = HDFTagType.DFTAG_NT

    version = fields.StructField('B')
    type_   = fields.StructField('B')
    width   = fields.StructField('B')
    class_  = fields.StructField('B')

    def validate(self, stream):
        return stream.remaining() == 0


class FileIdentifier(Tag, Chunk):
    tag_id = HDFTagType.DFTAG_FID

    character_string = fields.TextField()


class ScientificDataDimension(Tag, Chunk):
    '''Rank and dimensions of a scientific dataset, with the number type of the
    data and of the scales of each dimension.

        rank        u16
        dimensions  rank * u32
        datatype    tag/ref of the number type
        scale       rank * tag/ref

    Extra data after the last scale is ignored.'''
    tag_id     = HDFTagType.DFTAG_SDD

    rank       = fields.StructField('H')
    dimensions = fields.ArrayField(fields.StructField('I'), n=Dependency('.rank'))
    datatype   = TagRef()
    scale      = fields.ArrayField(TagRef(), n=Dependency('.rank'))

    @property
    def shape(self):
        return tuple(_.value for _ in self.dimensions)

    @property
    def scale_references(self):
        return [_.as_tuple() for _ in self.scale]

    def __str__(self):
        return 'x'.join(str(_) for _ in self.shape)


tag2chunk = {
    HDFTagType.DFTAG_VERSION: Version,
    HDFTagType.DFTAG_NT: NumberType,
    HDFTagType.DFTAG_SDD: ScientificDataDimension,
}


def from_raw(tag, data, compliant=Compliant.NONE):
    '''Interpret the payload in data as indicated by tag.

    This never fails unless it's asked for with the compliant flags TAG
    (for recognized tags that don't unpack) and UNKNOWN (for the tags
    not in tag2chunk).'''
    logger.debug('decoding tag %d from %d bytes' % (tag, len(data)))

    if tag == HDFTagType.DFTAG_NULL:
        return Null()

    chunk_cls = tag2chunk.get(tag)

    if chunk_cls is None:
        if compliant & Compliant.UNKNOWN:
            raise UnknownTag(chain=[], tag=tag)

        return Unknown(tag, data)

    try:
        return chunk_cls(data)
    except UnpackException as e:
        logger.warning('tag %d is corrupt: %s' % (tag, e))
        if compliant & Compliant.TAG:
            raise CorruptTag(chain=e.chain, tag=tag) from e

        return Corrupt(tag)
