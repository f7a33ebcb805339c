from __future__ import annotations

import numpy as np
import pytest

from src.filtering.buffers import (
    ChannelBuffer,
    ChannelBufferSet,
    ChannelCountMismatchError,
    median,
    percentile,
)


def test_median_single_value() -> None:
    assert median([4.2]) == 4.2


def test_median_odd_length_is_middle_order_statistic() -> None:
    assert median([1, 5, 2, 8, 3]) == 3.0
    assert median([9, -1, 4]) == 4.0


def test_median_even_length_interpolates() -> None:
    assert median([1, 5, 2, 8]) == 3.5
    assert median([10, 20]) == 15.0


def test_percentile_linear_interpolation() -> None:
    values = [4, 1, 3, 2]
    assert percentile(values, 0) == 1.0
    assert percentile(values, 100) == 4.0
    # rank = 0.25 * 3 = 0.75 -> 1 + 0.75 * (2 - 1)
    assert percentile(values, 25) == pytest.approx(1.75)


def test_percentile_rejects_empty_and_out_of_range() -> None:
    with pytest.raises(ValueError):
        median([])
    with pytest.raises(ValueError):
        percentile([1.0], 101)


def test_channel_buffer_evicts_oldest_first() -> None:
    buffer = ChannelBuffer()
    for value in [1, 2, 3, 4, 5]:
        buffer.append(value)
    assert buffer.evict_to(3) == 2
    assert buffer.values().tolist() == [3.0, 4.0, 5.0]
    assert buffer.evict_to(5) == 0
    assert len(buffer) == 3
    assert buffer.median() == 4.0


def test_buffer_set_moves_in_lockstep() -> None:
    buffers = ChannelBufferSet(2)
    buffers.push([1.0, 10.0], target=2)
    buffers.push([2.0, 20.0], target=2)
    buffers.push([3.0, 30.0], target=2)

    assert buffers.length == 2
    assert buffers[0].values().tolist() == [2.0, 3.0]
    assert buffers[1].values().tolist() == [20.0, 30.0]
    np.testing.assert_array_equal(buffers.medians(), [2.5, 25.0])


def test_buffer_set_shrinks_when_target_drops() -> None:
    buffers = ChannelBufferSet(1)
    for value in range(6):
        buffers.push([value], target=10)
    assert buffers.length == 6
    buffers.push([6], target=2)
    assert buffers[0].values().tolist() == [5.0, 6.0]


def test_buffer_set_rejects_wrong_channel_count_without_mutation() -> None:
    buffers = ChannelBufferSet(2)
    buffers.push([10.0, 20.0], target=5)
    with pytest.raises(ChannelCountMismatchError) as exc_info:
        buffers.push([1.0, 2.0, 3.0], target=5)
    assert exc_info.value.expected == 2
    assert exc_info.value.received == 3
    assert isinstance(exc_info.value, ValueError)
    assert buffers.length == 1


def test_buffer_set_clear() -> None:
    buffers = ChannelBufferSet(3)
    buffers.push([1.0, 2.0, 3.0], target=4)
    buffers.clear()
    assert buffers.length == 0
    assert buffers.channel_count == 3


def test_buffer_set_requires_a_channel() -> None:
    with pytest.raises(ValueError):
        ChannelBufferSet(0)


def test_percentile_along_axis_matches_per_row() -> None:
    history = np.array([[1.0, 5.0, 2.0, 8.0], [4.0, 4.0, 9.0, 0.0]])
    result = percentile(history, 50.0, axis=1)
    assert isinstance(result, np.ndarray)
    np.testing.assert_array_equal(result, [median(history[0]), median(history[1])])
    np.testing.assert_array_equal(result, [3.5, 4.0])


def test_buffer_set_medians_agree_with_channel_buffers() -> None:
    buffers = ChannelBufferSet(2)
    for vector in ([1.0, 7.0], [9.0, 3.0], [4.0, 3.5]):
        buffers.push(vector, target=5)
    expected = [buffers[0].median(), buffers[1].median()]
    np.testing.assert_array_equal(buffers.medians(), expected)
    np.testing.assert_array_equal(buffers.medians(), [4.0, 3.5])
