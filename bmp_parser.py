import enum
import logging
from dataclasses import dataclass, fields

from bmp_errors import (
    AlreadyLoadedError, BMPError, DecodeFailedError, InvalidBitmapError,
    NotLoadedError
)
from byte_source import ByteSource

logger = logging.getLogger(__name__)

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
BI_RGB = 0


@dataclass(frozen=True)
class ColorSymbol:
    rgb: tuple
    symbol: str

    def __post_init__(self):
        # Lists compare unequal to tuples
        object.__setattr__(self, 'rgb', tuple(self.rgb))


# Checked top to bottom, first exact match wins
COLOR_STORE = (
    ColorSymbol((255, 255, 255), '.'),
    ColorSymbol((0, 0, 0), '#'),
)

# Used for every color not in the store
ERROR_SYMBOL = '?'


def find_color_symbol(rgb, color_table=COLOR_STORE, fallback=ERROR_SYMBOL):
    for entry in color_table:
        if entry.rgb == tuple(rgb):
            return entry.symbol
    return fallback


def row_stride(width, bytes_per_pixel):
    # Each row is padded to a multiple of 4 bytes
    return (width * bytes_per_pixel + 3) // 4 * 4


def pixel_offset(data_offset, file_row, x, stride, bytes_per_pixel):
    return data_offset + file_row * stride + x * bytes_per_pixel


@dataclass(frozen=True)
class FileHeader:
    signature: bytes
    file_size: int
    reserved1: int
    reserved2: int
    pixel_data_offset: int

    @classmethod
    def from_bytes(cls, b):
        return cls(
            signature=bytes(b[0:2]),
            file_size=int.from_bytes(b[2:6], 'little'),
            reserved1=int.from_bytes(b[6:8], 'little'),
            reserved2=int.from_bytes(b[8:10], 'little'),
            pixel_data_offset=int.from_bytes(b[10:14], 'little'),
        )


@dataclass(frozen=True)
class InfoHeader:
    header_size: int
    width: int
    height: int
    planes: int
    bits_per_pixel: int
    compression: int
    image_size: int
    x_pixels_per_meter: int
    y_pixels_per_meter: int
    colors_used: int
    colors_important: int

    @classmethod
    def from_bytes(cls, b):
        # Offsets are relative to the start of the info header
        return cls(
            header_size=int.from_bytes(b[0:4], 'little'),
            width=int.from_bytes(b[4:8], 'little', signed=True),
            # Positive height means rows are stored bottom-to-top
            height=int.from_bytes(b[8:12], 'little', signed=True),
            planes=int.from_bytes(b[12:14], 'little'),
            bits_per_pixel=int.from_bytes(b[14:16], 'little'),
            compression=int.from_bytes(b[16:20], 'little'),
            image_size=int.from_bytes(b[20:24], 'little'),
            x_pixels_per_meter=int.from_bytes(b[24:28], 'little', signed=True),
            y_pixels_per_meter=int.from_bytes(b[28:32], 'little', signed=True),
            colors_used=int.from_bytes(b[32:36], 'little'),
            colors_important=int.from_bytes(b[36:40], 'little'),
        )


# Windows structure field names, in declaration order
FILE_HEADER_NAMES = ('bfType', 'bfSize', 'bfReserved1', 'bfReserved2', 'bfOffBits')
INFO_HEADER_NAMES = (
    'biSize', 'biWidth', 'biHeight', 'biPlanes', 'biBitCount', 'biCompression',
    'biSizeImage', 'biXPelsPerMeter', 'biYPelsPerMeter', 'biClrUsed', 'biClrImportant',
)


class DecoderState(enum.Enum):
    UNOPENED = "unopened"
    LOADED = "loaded"
    CLOSED = "closed"


class BMPParser:
    def __init__(self, filepath, expected_extension="bmp",
                 color_table=COLOR_STORE, fallback_symbol=ERROR_SYMBOL):
        self.filepath = filepath
        self.expected_extension = expected_extension
        self.color_table = tuple(color_table)
        self.fallback_symbol = fallback_symbol
        self.state = DecoderState.UNOPENED
        self.file_header = None
        self.info_header = None
        self._data = None

    def decode(self):
        if self.state is not DecoderState.UNOPENED:
            raise AlreadyLoadedError(f"{self.filepath} is {self.state.value}")

        data = self._load_bytes()
        try:
            file_header = FileHeader.from_bytes(data[:FILE_HEADER_SIZE])
            info_header = InfoHeader.from_bytes(
                data[FILE_HEADER_SIZE:FILE_HEADER_SIZE + INFO_HEADER_SIZE])
            self._validate(data, file_header, info_header)
        except BMPError as e:
            raise DecodeFailedError("header", e) from e

        # Nothing is kept unless both headers decoded and validated
        self._data = data
        self.file_header = file_header
        self.info_header = info_header
        self.state = DecoderState.LOADED
        logger.debug("decoded %s: %dx%d, %d bpp", self.filepath,
                     info_header.width, info_header.height, info_header.bits_per_pixel)
        return self

    def _load_bytes(self):
        source = ByteSource(self.filepath, self.expected_extension)
        stage = "open"
        try:
            source.open()
            stage = "size"
            source.size()
            stage = "read"
            data = source.read_all()
            stage = "close"
            source.close()
        except BMPError as e:
            raise DecodeFailedError(stage, e) from e
        finally:
            source.close()
        return data

    @staticmethod
    def _validate(data, file_header, info_header):
        if len(data) < FILE_HEADER_SIZE + INFO_HEADER_SIZE:
            raise InvalidBitmapError(f"file too short for BMP headers ({len(data)} bytes)")
        # Signature (must start with 'BM')
        if file_header.signature != b'BM':
            raise InvalidBitmapError(f"not a BMP file (signature {file_header.signature!r})")
        if info_header.width < 0:
            raise InvalidBitmapError(f"negative width: {info_header.width}")
        if info_header.bits_per_pixel != 24:
            raise InvalidBitmapError(f"unsupported bpp: {info_header.bits_per_pixel}")
        if info_header.compression != BI_RGB:
            raise InvalidBitmapError(f"compressed BMP not supported (method {info_header.compression})")

        stride = row_stride(info_header.width, info_header.bits_per_pixel // 8)
        end = file_header.pixel_data_offset + stride * abs(info_header.height)
        if end > len(data):
            raise InvalidBitmapError(
                f"pixel array ends at byte {end}, file has {len(data)} bytes")

    def _require_loaded(self):
        if self.state is not DecoderState.LOADED:
            raise NotLoadedError(f"{self.filepath} is {self.state.value}, call decode() first")

    @property
    def width(self):
        self._require_loaded()
        return self.info_header.width

    @property
    def height(self):
        self._require_loaded()
        return abs(self.info_header.height)

    def read_pixels(self):
        self._require_loaded()
        b = self._data
        height = self.info_header.height
        abs_height = abs(height)
        width = self.info_header.width
        bytes_per_pixel = self.info_header.bits_per_pixel // 8
        stride = row_stride(width, bytes_per_pixel)
        offset = self.file_header.pixel_data_offset

        pixels = []
        for y in range(abs_height):
            # Bottom-up rows: the first stored row is the bottom of the image
            file_row = abs_height - 1 - y if height > 0 else y
            row_pixels = []
            for x in range(width):
                idx = pixel_offset(offset, file_row, x, stride, bytes_per_pixel)
                B, G, R = b[idx:idx + 3]
                row_pixels.append((R, G, B))
            pixels.append(row_pixels)
        return pixels

    def render(self):
        return [
            ''.join(find_color_symbol(rgb, self.color_table, self.fallback_symbol) for rgb in row)
            for row in self.read_pixels()
        ]

    def describe_headers(self):
        self._require_loaded()
        file_values = [getattr(self.file_header, f.name) for f in fields(FileHeader)]
        # bfType is shown the way the WORD reads in memory: 'BM' -> 19778
        file_values[0] = int.from_bytes(file_values[0], 'little')
        info_values = [getattr(self.info_header, f.name) for f in fields(InfoHeader)]
        return {
            'BITMAPFILEHEADER': dict(zip(FILE_HEADER_NAMES, file_values)),
            'BITMAPINFOHEADER': dict(zip(INFO_HEADER_NAMES, info_values)),
        }

    def close(self):
        self._data = None
        self.state = DecoderState.CLOSED

    def __enter__(self):
        return self.decode()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
