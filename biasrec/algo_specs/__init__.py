from . import bias, iu_bias, i_bias

algorithms = {
    'BIAS': bias,
    'IU-BIAS': iu_bias,
    'I-BIAS': i_bias,
}
