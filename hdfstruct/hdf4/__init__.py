'''
# Hierarchical Data Format (version 4)

Container for scientific data created at NCSA: a file is a flat sequence of
bytes starting with a magic number and followed by a linked list of blocks of
data descriptors (DD); each data descriptor indicates with a tag what kind of
object is stored in the file and where its payload is.

  .------------------------------.
  | magic 0e 03 13 01            |
  | DD block header              |---.  n (u16), offset of next block (u32)
  | DD 1                         |   |  tag (u16), reference (u16),
  | ...                          |   |  offset (u32), length (u32)
  | DD n                         |   |
  | payloads                     |   |
  | DD block header              |<--'  until the offset of next block is zero
  | ...                          |
  '------------------------------'

All the integers are big-endian and the offsets are absolute from the start of
the file. The couple tag/reference identifies uniquely an object in the file.

The specification is at <https://support.hdfgroup.org/release4/doc/DSpec_html/DS.pdf>.

A data descriptor with a broken payload doesn't stop the parsing (its tag is
decoded as Corrupt), a broken list of blocks does.
'''
import logging

from ..core import Chunk
from .. import fields
from ..enum import Compliant
from ..exceptions import (
    HDFStructException,
    UnpackException,
    MagicException,
    IncompleteFile,
    InvalidMagicNumber,
    CyclicDirectory,
)
from . import tags
from .tags import (
    Tag,
    TagRef,
    Null,
    Invalid,
    Version,
)
from .enum import HDFTagType


logger = logging.getLogger(__name__)

HDF_MAGIC = b'\x0e\x03\x13\x01'
# magic plus the header of the first block of data descriptors
MINIMUM_SIZE = 10


class HDFHeader(Chunk):
    magic = fields.StringField(4, default=HDF_MAGIC, is_magic=True)


class DescriptorBlockHeader(Chunk):
    count      = fields.StructField('H')
    next_block = fields.StructField('I')


class DataDescriptorRecord(Chunk):
    tag         = fields.StructField('H')
    reference   = fields.StructField('H')
    data_offset = fields.StructField('I')
    data_length = fields.StructField('I')


class DataDescriptor(object):
    '''The decoded tag of a data descriptor together with its reference.'''

    def __init__(self, tag: Tag, reference: int):
        self.tag = tag
        self.reference = reference

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.tag!r}, reference={self.reference})>'

    def __eq__(self, other):
        if not isinstance(other, DataDescriptor):
            return NotImplemented

        return self.tag == other.tag and self.reference == other.reference

    __hash__ = None


class DirectoryField(fields.Field):
    '''Follows the linked list of blocks of data descriptors starting from the
    actual position of the stream; its value is the list of DataDescriptor in the
    same order they are found in the file.

    The payload of each data descriptor is passed to tags.from_raw(): when the
    declared range is outside of the file, the payload is empty (or the tag is
    Invalid if the RANGE compliance is requested).'''

    def __init__(self, **kw):
        super().__init__(**kw)
        self.blocks = []

    def __repr__(self):
        return f'<{self.__class__.__name__}({len(self.value)} descriptors in {len(self.blocks)} blocks)>'

    def __getitem__(self, item):
        return self.value[item]

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    def value_from_default(self):
        return []

    def _get_size(self):
        record_size = DataDescriptorRecord().size

        return sum(block.size + block.count.value * record_size for block in self.blocks)

    def _get_tag_compliance(self):
        compliant = Compliant.NONE
        for level in (Compliant.TAG, Compliant.UNKNOWN):
            if self.is_compliant(level):
                compliant |= level

        return compliant

    def unpack_block_header(self, stream, offset):
        header = DescriptorBlockHeader(father=self)

        try:
            header.unpack(stream.seek(offset))
        except UnpackException as e:
            raise IncompleteFile(chain=e.chain, message=f'no room for the block header at 0x{offset:08x}') from e

        return header

    def decode(self, record, stream, tag_compliance):
        tag = record.tag.value
        offset, length = record.data_offset.value, record.data_length.value

        if tag != HDFTagType.DFTAG_NULL and not stream.contains(offset, length):
            logger.warning('data descriptor %d/%d points outside of the file (offset=0x%x, length=%d)' % (
                tag, record.reference.value, offset, length))
            if self.is_compliant(Compliant.RANGE):
                return Invalid(tag)

        return tags.from_raw(tag, stream.slice(offset, length), compliant=tag_compliance)

    def unpack(self, stream):
        self.offset = stream.tell()
        self.value = []
        self.blocks = []

        tag_compliance = self._get_tag_compliance()
        # the same record is refilled for each data descriptor, its values
        # are copied out before reading the next one
        record = DataDescriptorRecord(father=self)
        record_size = record.size
        visited = set()
        next_block = stream.tell()

        while next_block != 0:
            if next_block in visited:
                raise CyclicDirectory(chain=[str(len(self.blocks))], offset=next_block)
            visited.add(next_block)

            header = self.unpack_block_header(stream, next_block)
            count = header.count.value
            logger.debug('block at 0x%08x with %d data descriptors, next at 0x%08x' % (
                next_block, count, header.next_block.value))

            if not stream.contains(stream.tell(), count * record_size):
                raise IncompleteFile(
                    chain=[str(len(self.blocks))],
                    message=f'no room for {count} data descriptors at 0x{stream.tell():08x}')

            self.blocks.append(header)

            for _ in range(count):
                record.unpack(stream)

                # slicing the payload doesn't move the stream
                try:
                    tag = self.decode(record, stream, tag_compliance)
                except HDFStructException as e:
                    e.chain.append(str(len(self.value)))
                    raise

                self.value.append(DataDescriptor(tag, record.reference.value))

            next_block = header.next_block.value


class HDFFile(Chunk):
    '''Root of the format: it owns the list of data descriptors in the order
    they are found in the file.

    By default a wrong magic number aborts the unpacking, pass a different
    compliant to change that (see hdfstruct.enum.Compliant).'''
    header      = HDFHeader()
    descriptors = DirectoryField()

    def __init__(self, data=None, compliant=Compliant.MAGIC, **kwargs):
        super().__init__(data, compliant=compliant, **kwargs)

    def __iter__(self):
        return iter(self.descriptors)

    def __len__(self):
        return len(self.descriptors)

    def unpack(self, stream):
        if len(stream) < MINIMUM_SIZE:
            raise IncompleteFile(chain=[], message=f'file is {len(stream)} bytes, at least {MINIMUM_SIZE} are needed')

        try:
            super().unpack(stream)
        except MagicException as e:
            raise InvalidMagicNumber(chain=e.chain, message=e.message) from e

    def remove_nulls(self):
        '''Drop in place the descriptors with a Null tag, the order of the others is preserved.'''
        self.descriptors.value[:] = [_ for _ in self.descriptors if not isinstance(_.tag, Null)]

    def get(self, tag, reference):
        '''Return the first descriptor with the given tag and reference, None if it doesn't exist.'''
        for descriptor in self.descriptors:
            if descriptor.tag.tag_id == tag and descriptor.reference == reference:
                return descriptor

        return None

    def resolve(self, tagref):
        '''Look for the descriptor pointed by a TagRef (or a couple tag/reference).'''
        tag, reference = tagref.as_tuple() if isinstance(tagref, TagRef) else tagref

        return self.get(tag, reference)

    def get_tags(self, kind):
        '''Iterate over the descriptors with a tag of the given class.'''
        return (_ for _ in self.descriptors if isinstance(_.tag, kind))

    @property
    def version(self):
        descriptor = next(self.get_tags(Version), None)

        return descriptor.tag if descriptor else None


def parse(data, compliant=Compliant.NONE):
    '''Parse an HDF4 file from bytes, a path or a Stream; the magic number is always checked.'''
    return HDFFile(data, compliant=compliant | Compliant.MAGIC)
