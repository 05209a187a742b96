# renderer/tone_mapping.py
import math

from numba import njit

# Just under 256 so that a channel of exactly 1.0 still truncates to 255.
QUANTIZE_SCALE = 255.999


@njit(nogil=True)
def gamma_encode_row(linear_row, samples_per_pixel, output_row):
    """
    Average, gamma-correct (gamma 2) and quantise one row of summed samples.

    linear_row holds the sum of samples_per_pixel radiance samples per pixel,
    shape (width, 3). Each channel becomes int(255.999 * sqrt(sum / spp)),
    clamped into [0, 255]; negative and NaN sums map to 0. Runs without the
    GIL so render threads can write rows concurrently.
    """
    scale = 1.0 / samples_per_pixel
    for x in range(linear_row.shape[0]):
        for c in range(3):
            value = linear_row[x, c] * scale
            if value > 0.0:
                encoded = QUANTIZE_SCALE * math.sqrt(value)
                if encoded > 255.0:
                    encoded = 255.0
            else:
                encoded = 0.0
            output_row[x, c] = int(encoded)
