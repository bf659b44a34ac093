"""Golden end-to-end pipeline: conv2d -> add_bias -> relu -> max_pool2d."""
import numpy as np

import patchconv as pc
import patchconv.nn.functional as F


def _image():
    # (Ci, H, W, B) = (3, 8, 1, 1); channel c holds c, c+1, ..., c+7
    return pc.tensor([[[[float(c + h)]] for h in range(8)] for c in range(3)],
                     dtype=pc.float32)


def _kernels():
    # (Co, Ci, kH, kW) = (2, 3, 2, 1)
    return pc.tensor([
        [[[1.0], [2.0]], [[3.0], [4.0]], [[5.0], [6.0]]],
        [[[6.0], [5.0]], [[4.0], [3.0]], [[2.0], [1.0]]],
    ], dtype=pc.float32)


def _run():
    out = F.conv2d(_image(), _kernels(), (2, 1), (1, 1), pc.Padding.VALID)
    out = F.add_bias(out, pc.tensor([10.0, 20.0], dtype=pc.float32))
    out = F.relu(out)
    return F.max_pool2d(out, (2, 1))


def test_golden_conv_stage():
    image, kernels = _image(), _kernels()
    assert image.shape == (3, 8, 1, 1)
    assert kernels.shape == (2, 3, 2, 1)
    out = F.conv2d(image, kernels, stride=(2, 1), dilation=(1, 1), padding='valid')
    assert out.shape == (2, 4, 1, 1)
    assert out.numpy()[:, :, 0, 0].tolist() == [[41.0, 83.0, 125.0, 167.0],
                                                [22.0, 64.0, 106.0, 148.0]]


def test_golden_bias_and_relu_stage():
    out = F.conv2d(_image(), _kernels(), stride=(2, 1))
    out = F.relu(F.add_bias(out, [10.0, 20.0]))
    assert out.numpy()[:, :, 0, 0].tolist() == [[51.0, 93.0, 135.0, 177.0],
                                                [42.0, 84.0, 126.0, 168.0]]


def test_golden_pipeline_output():
    out = _run()
    assert out.shape == (2, 2, 1, 1)
    assert out.dtype == pc.float32
    np.testing.assert_array_equal(out.numpy()[:, :, 0, 0],
                                  np.array([[93.0, 177.0], [84.0, 168.0]],
                                           dtype=np.float32))
