"""tee_secure.reverser 유닛 테스트."""
import threading

import pytest
from tee_secure import AllocationError, reverse, reverse_terminated, reverse_text
from tee_secure import reverser


class TestReverse:
    def test_hello(self):
        assert reverse(b'hello') == b'olleh'

    def test_empty_returns_empty_bytearray(self):
        result = reverse(b'')
        assert result is not None
        assert isinstance(result, bytearray)
        assert len(result) == 0

    def test_single_byte(self):
        assert reverse(b'a') == b'a'

    def test_two_bytes(self):
        assert reverse(b'ab') == b'ba'

    def test_embedded_nul_is_payload(self):
        assert reverse(bytes([0x01, 0x00, 0x02])) == bytes([0x02, 0x00, 0x01])

    def test_large_uniform_input(self):
        data = b'x' * 1_048_576
        result = reverse(data)
        assert len(result) == 1_048_576
        assert result == data

    def test_index_mapping(self):
        data = bytes(range(256))
        result = reverse(data)
        assert len(result) == len(data)
        for i in range(len(data)):
            assert result[i] == data[len(data) - 1 - i]

    def test_involution(self):
        data = b'\x00\xffhello world\x7f\x80'
        assert reverse(reverse(data)) == data

    def test_accepts_bytearray_and_memoryview(self):
        assert reverse(bytearray(b'abc')) == b'cba'
        assert reverse(memoryview(b'abc')) == b'cba'

    def test_memoryview_slice(self):
        view = memoryview(b'0123456789')[2:5]
        assert reverse(view) == b'432'


class TestReversePurity:
    def test_input_not_modified(self):
        data = bytearray(b'hello')
        reverse(data)
        assert data == bytearray(b'hello')

    def test_two_calls_give_independent_equal_outputs(self):
        data = b'hello'
        first = reverse(data)
        second = reverse(data)
        assert first == second
        assert first is not second
        first[0] = ord('X')
        assert second == b'olleh'

    def test_mutating_output_does_not_touch_input(self):
        data = bytearray(b'abc')
        result = reverse(data)
        result[0] = ord('Z')
        assert data == bytearray(b'abc')

    def test_mutating_input_does_not_touch_output(self):
        data = bytearray(b'abc')
        result = reverse(data)
        data[0] = ord('Z')
        assert result == bytearray(b'cba')

    def test_concurrent_calls(self):
        inputs = [bytes([i]) * 1000 + bytes(range(i)) for i in range(32)]
        results = [None] * len(inputs)

        def worker(idx):
            results[idx] = reverse(inputs[idx])

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(len(inputs))]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for data, result in zip(inputs, results):
            assert result == data[::-1]


class TestReverseErrors:
    @pytest.mark.parametrize('value', [None, 'hello', 5, [1, 2, 3]])
    def test_rejects_non_bytes_like(self, value):
        with pytest.raises(TypeError):
            reverse(value)

    def test_max_length_exceeded(self):
        with pytest.raises(AllocationError) as exc_info:
            reverse(b'hello', max_length=4)
        assert exc_info.value.length == 5
        assert exc_info.value.limit == 4

    def test_max_length_boundary(self):
        assert reverse(b'hello', max_length=5) == b'olleh'

    def test_memory_error_is_mapped(self, monkeypatch):
        def fail(_data):
            raise MemoryError

        monkeypatch.setattr(reverser, 'bytearray', fail, raising=False)
        with pytest.raises(AllocationError) as exc_info:
            reverse(b'hello')
        assert isinstance(exc_info.value.__cause__, MemoryError)
        assert exc_info.value.length == 5


class TestReverseTerminated:
    def test_appends_fresh_terminator(self):
        assert reverse_terminated(b'hello') == b'olleh\x00'

    def test_stops_at_first_nul(self):
        assert reverse_terminated(b'abc\x00junk') == b'cba\x00'

    def test_empty_payload(self):
        assert reverse_terminated(b'\x00') == b'\x00'
        assert reverse_terminated(b'') == b'\x00'

    def test_memoryview_input(self):
        assert reverse_terminated(memoryview(b'ab\x00c')) == b'ba\x00'

    def test_max_length_applies_to_payload(self):
        assert reverse_terminated(b'ab\x00cdef', max_length=2) == b'ba\x00'
        with pytest.raises(AllocationError):
            reverse_terminated(b'abc\x00', max_length=2)

    def test_rejects_none(self):
        with pytest.raises(TypeError):
            reverse_terminated(None)


class TestReverseText:
    def test_ascii(self):
        assert reverse_text('hello') == 'olleh'

    def test_empty(self):
        assert reverse_text('') == ''

    def test_reverses_code_units_not_characters(self):
        # '한' is three UTF-8 bytes; reversing them is not valid UTF-8
        result = reverse_text('한')
        assert result.encode('utf-8', 'surrogateescape') == '한'.encode('utf-8')[::-1]

    def test_involution_with_multibyte(self):
        text = 'héllo 한글'
        assert reverse_text(reverse_text(text)) == text

    def test_other_encoding(self):
        assert reverse_text('abc', encoding='latin-1') == 'cba'

    def test_rejects_bytes(self):
        with pytest.raises(TypeError):
            reverse_text(b'hello')
