import struct

import numpy as np
import pytest

from pintsized.frame_info import GlobalUniformObject


def test_serialized_size_is_256_bytes():
    assert len(GlobalUniformObject().to_bytes()) == GlobalUniformObject.SIZE == 256


def test_default_is_identity():
    data = GlobalUniformObject().to_bytes()
    assert struct.unpack_from("<f", data, 0)[0] == 1.0
    assert struct.unpack_from("<f", data, 4)[0] == 0.0


def test_round_trip():
    rng = np.random.default_rng(3)
    original = GlobalUniformObject(
        projection=rng.random((4, 4)),
        view=rng.random((4, 4)),
    )
    assert GlobalUniformObject.from_bytes(original.to_bytes()) == original


def test_matrices_are_column_major():
    projection = np.eye(4)
    projection[0, 3] = 5.0
    data = GlobalUniformObject(projection=projection).to_bytes()
    assert struct.unpack_from("<f", data, 48)[0] == 5.0


def test_wrong_length_raises():
    with pytest.raises(ValueError):
        GlobalUniformObject.from_bytes(bytes(255))


def test_wrong_shape_raises():
    with pytest.raises(ValueError):
        GlobalUniformObject(view=np.eye(3))


def test_different_objects_compare_unequal():
    view = np.eye(4)
    view[1, 1] = 2.0
    assert not (GlobalUniformObject(view=view) == GlobalUniformObject())