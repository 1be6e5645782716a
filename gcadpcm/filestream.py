import os


class ShortReadError(EOFError):
    def __init__(self, expected, received):
        super().__init__("expected {} bytes, source returned {}".format(expected, received))
        self.expected = expected
        self.received = received


def ReadExact(reader, count):
    data = reader.read(count)
    if data is None or len(data) != count:
        raise ShortReadError(count, 0 if data is None else len(data))
    return data


class Filestream():
    """
    Sequential byte source over a file of raw ADPCM frames.
    offset skips a leading header the caller already knows the size of.
    """
    def __init__(self, filepath, offset=0):
        self.__filename = os.path.basename(filepath)
        self.__stream = open(filepath, 'rb')
        self.__stream.seek(0, 2)
        self.__length = self.__stream.tell()
        if offset < 0 or offset > self.__length:
            self.__stream.close()
            raise ValueError("offset {} outside of {} ({} bytes)".format(offset, self.__filename, self.__length))
        self.__stream.seek(offset, 0)
        self.__offset = offset

    def read(self, count):
        return self.__stream.read(count)

    def close(self):
        self.__stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def Filename(self):
        return self.__filename

    @property
    def Length(self):
        return self.__length

    @property
    def Offset(self):
        return self.__offset

    @property
    def Remaining(self):
        return self.__length - self.__stream.tell()

    def __repr__(self):
        return "Stream: " + str(self.__stream) + " Length: " + str(self.__length)
