# Copyright (C) 2020. Huawei Technologies Co., Ltd. All rights reserved.
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN
# THE SOFTWARE.
import math

import numpy as np

from roadviz.core.utils.math import constrain_angle, cumulative_lengths, vec_to_radians


def test_constrain_angle():
    assert math.isclose(constrain_angle(3 * math.pi), math.pi)
    assert math.isclose(constrain_angle(-math.pi / 2), -math.pi / 2)
    assert math.isclose(constrain_angle(2 * math.pi + 0.25), 0.25)


def test_vec_to_radians():
    assert math.isclose(vec_to_radians((1, 0)), 0)
    assert math.isclose(vec_to_radians((0, 2)), math.pi / 2)
    assert math.isclose(vec_to_radians((-1, 0)), math.pi)
    assert math.isclose(vec_to_radians((0, -3)), -math.pi / 2)


def test_cumulative_lengths():
    pts = np.array([[0, 0], [3, 4], [3, 10]], dtype=np.float64)
    assert np.allclose(cumulative_lengths(pts), [0, 5, 11])
