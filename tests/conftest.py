import struct

import pytest


HDF_MAGIC = b'\x0e\x03\x13\x01'


def _build_hdf(*blocks):
    '''Build an HDF file in memory with a block of data descriptors for each argument.

    Each block is a list of entries: an entry (tag, reference, payload) has the
    payload laid out right after its block, an entry (tag, reference, offset, length)
    is written as it is.'''
    blocks = blocks or ([],)
    sizes = [6 + 12 * len(block) + sum(len(entry[2]) for entry in block if len(entry) == 3) for block in blocks]

    offsets = [4]
    for size in sizes[:-1]:
        offsets.append(offsets[-1] + size)

    data = HDF_MAGIC
    for index, block in enumerate(blocks):
        next_block = offsets[index + 1] if index + 1 < len(blocks) else 0
        payload_offset = offsets[index] + 6 + 12 * len(block)

        records, payloads = b'', b''
        for entry in block:
            if len(entry) == 3:
                tag, reference, payload = entry
                records += struct.pack('>HHII', tag, reference, payload_offset + len(payloads), len(payload))
                payloads += payload
            else:
                records += struct.pack('>HHII', *entry)

        data += struct.pack('>HI', len(block), next_block) + records + payloads

    return data


@pytest.fixture
def build_hdf():
    return _build_hdf
