import copy
import io
import os
import tempfile
import unittest
from unittest import mock

from pydhparams import (
    DHParametersError,
    DiffieHellmanParameters,
    EncodingFormat,
    default_parameters,
)
from pydhparams.crypto.decoder import ParametersDecoder
from pydhparams.crypto.null_decoder import UnavailableDecoder
from tests.helpers import (
    MODP1024_P,
    OAKLEY_GROUP_2_DER,
    PRIME_512,
    PRIME_1023,
    SHORT_DER,
    dh_params_der,
    pem_armor,
)


class TestEmptyParameters(unittest.TestCase):
    def test_empty_is_valid(self):
        params = DiffieHellmanParameters()
        self.assertTrue(params.is_empty())
        self.assertTrue(params.is_valid())
        self.assertIs(params.error(), DHParametersError.NO_ERROR)
        self.assertEqual(params.error_string(), "no error")
        self.assertEqual(params.to_der(), b"")
        self.assertEqual(params.key_size, 0)
        self.assertEqual(repr(params), "DiffieHellmanParameters()")

    def test_empty_has_no_numbers(self):
        with self.assertRaises(ValueError):
            DiffieHellmanParameters().parameter_numbers()
        with self.assertRaises(ValueError):
            DiffieHellmanParameters().to_pem()

    def test_none_stream_skips_decoder(self):
        decoder = mock.Mock(spec=ParametersDecoder)
        params = DiffieHellmanParameters.from_stream(None, EncodingFormat.DER, decoder)
        self.assertTrue(params.is_empty())
        decoder.decode_der.assert_not_called()
        decoder.decode_pem.assert_not_called()


class TestDefaultParameters(unittest.TestCase):
    def test_default_is_valid_and_stable(self):
        a = default_parameters()
        b = DiffieHellmanParameters.default_parameters()
        self.assertTrue(a.is_valid())
        self.assertFalse(a.is_empty())
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))

    def test_default_is_second_oakley_group(self):
        params = default_parameters()
        self.assertEqual(params.to_der(), OAKLEY_GROUP_2_DER)
        self.assertEqual(params.parameter_numbers(), (MODP1024_P, 2))
        self.assertEqual(params.key_size, 1024)

    def test_repr_contains_base64_der(self):
        text = repr(default_parameters())
        self.assertTrue(text.startswith("DiffieHellmanParameters(MIGHAoGBAP"))
        self.assertTrue(text.endswith("AgEC)"))


class TestDecodeErrors(unittest.TestCase):
    def test_empty_der(self):
        params = DiffieHellmanParameters.from_bytes(b"", EncodingFormat.DER)
        self.assertIs(params.error(), DHParametersError.INVALID_INPUT_DATA)
        self.assertFalse(params.is_valid())
        self.assertFalse(params.is_empty())
        self.assertEqual(params.error_string(), "invalid input data")

    def test_garbage_der(self):
        params = DiffieHellmanParameters.from_bytes(b"\xde\xad\xbe\xef", EncodingFormat.DER)
        self.assertIs(params.error(), DHParametersError.INVALID_INPUT_DATA)
        self.assertEqual(params.to_der(), b"")

    def test_short_prime_is_unsafe(self):
        for data, fmt in ((SHORT_DER, EncodingFormat.DER), (pem_armor(SHORT_DER), EncodingFormat.PEM)):
            params = DiffieHellmanParameters.from_bytes(data, fmt)
            self.assertIs(params.error(), DHParametersError.UNSAFE_PARAMETERS)
            self.assertFalse(params.is_empty())
            self.assertEqual(
                params.error_string(),
                "the given Diffie-Hellman parameters are deemed unsafe",
            )

    def test_real_primes_below_floor_are_unsafe(self):
        for p in (PRIME_512, PRIME_1023):
            der = dh_params_der(p, 2)
            for data, fmt in ((der, EncodingFormat.DER), (pem_armor(der), EncodingFormat.PEM)):
                params = DiffieHellmanParameters.from_bytes(data, fmt)
                self.assertIs(params.error(), DHParametersError.UNSAFE_PARAMETERS, p.bit_length())
                self.assertEqual(params.to_der(), b"")

    def test_bad_generator_is_unsafe(self):
        params = DiffieHellmanParameters.from_bytes(dh_params_der(MODP1024_P, 1), EncodingFormat.DER)
        self.assertIs(params.error(), DHParametersError.UNSAFE_PARAMETERS)

    def test_unavailable_backend(self):
        with self.assertLogs("pydhparams.crypto.null_decoder", level="WARNING"):
            params = DiffieHellmanParameters.from_bytes(
                OAKLEY_GROUP_2_DER, EncodingFormat.DER, UnavailableDecoder()
            )
        self.assertIs(params.error(), DHParametersError.INVALID_INPUT_DATA)

    def test_bad_arguments_raise(self):
        with self.assertRaises(TypeError):
            DiffieHellmanParameters.from_bytes(12345, EncodingFormat.DER)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            DiffieHellmanParameters.from_bytes(OAKLEY_GROUP_2_DER, "der")  # type: ignore[arg-type]


class TestEqualityAndHash(unittest.TestCase):
    def test_der_roundtrip(self):
        first = DiffieHellmanParameters.from_bytes(OAKLEY_GROUP_2_DER, EncodingFormat.DER)
        second = DiffieHellmanParameters.from_bytes(first.to_der(), EncodingFormat.DER)
        self.assertEqual(first, second)
        self.assertEqual(hash(first), hash(second))

    def test_pem_and_der_compare_equal(self):
        from_pem = DiffieHellmanParameters.from_bytes(pem_armor(OAKLEY_GROUP_2_DER), EncodingFormat.PEM)
        from_der = DiffieHellmanParameters.from_bytes(OAKLEY_GROUP_2_DER, EncodingFormat.DER)
        self.assertTrue(from_pem.is_valid())
        self.assertEqual(from_pem, from_der)
        self.assertEqual(len({from_pem, from_der, default_parameters()}), 1)

    def test_pem_text_input(self):
        text = pem_armor(OAKLEY_GROUP_2_DER).decode("ascii")
        self.assertEqual(DiffieHellmanParameters.from_bytes(text), default_parameters())

    def test_pem_bundle_with_certificate_first(self):
        bundle = pem_armor(b"\x30\x00", label="CERTIFICATE") + pem_armor(OAKLEY_GROUP_2_DER)
        self.assertEqual(DiffieHellmanParameters.from_bytes(bundle, EncodingFormat.PEM), default_parameters())

    def test_to_pem_roundtrip(self):
        pem = default_parameters().to_pem()
        self.assertIn(b"-----BEGIN DH PARAMETERS-----", pem)
        self.assertEqual(DiffieHellmanParameters.from_bytes(pem, EncodingFormat.PEM), default_parameters())

    def test_invalid_values_have_no_bytes(self):
        bad = DiffieHellmanParameters.from_bytes(b"", EncodingFormat.DER)
        self.assertEqual(bad, DiffieHellmanParameters())
        self.assertNotEqual(bad, default_parameters())
        self.assertNotEqual(default_parameters(), object())

    def test_sortable(self):
        values = [default_parameters(), DiffieHellmanParameters()]
        self.assertEqual(sorted(values)[0], DiffieHellmanParameters())


class TestValueSemantics(unittest.TestCase):
    def test_immutable(self):
        params = default_parameters()
        with self.assertRaises(AttributeError):
            params._encoded = b"x"  # type: ignore[misc]
        with self.assertRaises(AttributeError):
            del params._error

    def test_copy_shares_value(self):
        params = default_parameters()
        self.assertIs(copy.copy(params), params)
        self.assertIs(copy.deepcopy(params), params)

    def test_cryptography_object(self):
        numbers = default_parameters().to_cryptography().parameter_numbers()
        self.assertEqual((numbers.p, numbers.g), (MODP1024_P, 2))


class TestStreams(unittest.TestCase):
    def test_from_stream_reads_everything(self):
        params = DiffieHellmanParameters.from_stream(io.BytesIO(OAKLEY_GROUP_2_DER), EncodingFormat.DER)
        self.assertEqual(params, default_parameters())

    def test_from_file(self):
        fd, path = tempfile.mkstemp(suffix=".pem")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(pem_armor(OAKLEY_GROUP_2_DER))
            params = DiffieHellmanParameters.from_file(path, EncodingFormat.PEM)
        finally:
            os.remove(path)
        self.assertEqual(params, default_parameters())


if __name__ == "__main__":
    unittest.main()
