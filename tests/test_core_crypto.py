"""
Unit tests for Core Crypto modules.

Tests:
- Number theory helpers
- Playfair digraph cipher
- Textbook RSA modular cipher
"""

import random

import pytest
from cryptify.constants import DIGRAPH_ALPHABET, FILLER_LETTER
from cryptify.core_crypto.number_theory import (
    mod_exp, gcd, extended_gcd, mod_inverse, is_prime, suggest_primes
)
from cryptify.core_crypto.digraph_cipher import (
    DigraphCipher, Direction, normalize_letters, prepare_digraphs
)
from cryptify.core_crypto.modular_cipher import (
    ModularCipher, encode_cipher_values, decode_cipher_values,
    find_public_exponent, parse_prime
)


def _pairwise_distinct_text(rng: random.Random, pairs: int) -> str:
    """Letters whose digraphs never repeat a letter, so no filler is added."""
    out = []
    for _ in range(pairs):
        a, b = rng.sample(DIGRAPH_ALPHABET, 2)
        out.append(a + b)
    return "".join(out)


class TestNumberTheory:
    """Unit tests for number theory helpers."""

    def test_mod_exp_basic(self):
        """Test modular exponentiation."""
        # 2^10 mod 1000 = 1024 mod 1000 = 24
        assert mod_exp(2, 10, 1000) == 24
        assert mod_exp(3, 7, 13) == 3

    def test_mod_exp_fermat(self):
        """a^(p-1) = 1 (mod p) for prime p."""
        p = 101
        assert mod_exp(2, p - 1, p) == 1

    def test_mod_exp_special_cases(self):
        """Zero exponent, zero base and modulus one."""
        assert mod_exp(7, 0, 13) == 1
        assert mod_exp(0, 5, 13) == 0
        assert mod_exp(5, 3, 1) == 0

    def test_mod_exp_matches_builtin(self):
        """Square-and-multiply agrees with pow()."""
        for base, exp, mod in [(65, 3, 187), (123, 4567, 3233), (2, 1000, 997)]:
            assert mod_exp(base, exp, mod) == pow(base, exp, mod)

    def test_mod_exp_rejects_bad_arguments(self):
        """Negative exponent or non-positive modulus is rejected."""
        with pytest.raises(ValueError):
            mod_exp(2, -1, 7)
        with pytest.raises(ValueError):
            mod_exp(2, 3, 0)

    def test_gcd(self):
        """Test GCD calculation."""
        assert gcd(48, 18) == 6
        assert gcd(17, 13) == 1
        assert gcd(0, 9) == 9

    def test_extended_gcd(self):
        """Bezout coefficients satisfy a*x + b*y = gcd."""
        for a, b in [(240, 46), (3, 160), (17, 43), (10, 0)]:
            g, x, y = extended_gcd(a, b)
            assert g == gcd(a, b)
            assert a * x + b * y == g

    def test_mod_inverse(self):
        """Test modular inverse."""
        # 3 * 7 = 21 = 1 (mod 10)
        assert mod_inverse(3, 10) == 7
        inv = mod_inverse(17, 43)
        assert (17 * inv) % 43 == 1

    def test_mod_inverse_missing(self):
        """No inverse when gcd != 1."""
        with pytest.raises(ValueError):
            mod_inverse(4, 8)

    def test_is_prime_primes(self):
        """Trial division should identify primes."""
        for p in [2, 3, 5, 7, 11, 13, 17, 19, 23, 97, 101, 1009, 7919]:
            assert is_prime(p), f"{p} should be prime"

    def test_is_prime_composites(self):
        """Trial division should reject composites and values below 2."""
        for c in [-7, 0, 1, 4, 6, 9, 15, 21, 25, 49, 100, 7917, 1009 * 1013]:
            assert not is_prime(c), f"{c} should not be prime"

    def test_suggest_primes(self):
        """Suggestions skip excluded values and respect the limit."""
        assert suggest_primes() == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]
        assert suggest_primes(exclude=[2, 3], limit=3) == [5, 7, 11]
        assert suggest_primes(limit=0) == []


class TestDigraphPreparation:
    """Unit tests for Playfair text preparation."""

    def test_normalize_letters(self):
        """Uppercase, letters only, J folded into I."""
        assert normalize_letters("Hello, Jim! 42") == "HELLOIIM"
        assert normalize_letters("123 !?") == ""

    def test_filler_between_doubled_letters(self):
        """Doubled letters inside a pair get a filler."""
        assert prepare_digraphs("BALLOON") == "BALXLOON"

    def test_filler_after_odd_tail(self):
        """An unpaired final letter is padded."""
        assert prepare_digraphs("ABC") == "ABCX"

    def test_doubled_letters_across_pairs_untouched(self):
        """Equal letters in different pairs need no filler."""
        assert prepare_digraphs("ABBC") == "ABBC"

    def test_output_even_length(self):
        """Prepared stream is always even length."""
        for text in ["A", "AA", "AAA", "HIDETHEGOLD", "TREESTUMP"]:
            assert len(prepare_digraphs(text)) % 2 == 0


class TestDigraphCipher:
    """Unit tests for the Playfair cipher."""

    def test_monarchy_matrix(self):
        """Key letters fill the first cells, then the alphabet."""
        matrix = DigraphCipher("MONARCHY").matrix_snapshot()
        assert matrix[0] == ['M', 'O', 'N', 'A', 'R']
        assert matrix[1] == ['C', 'H', 'Y', 'B', 'D']
        assert matrix[2] == ['E', 'F', 'G', 'I', 'K']
        assert matrix[3] == ['L', 'P', 'Q', 'S', 'T']
        assert matrix[4] == ['U', 'V', 'W', 'X', 'Z']

    @pytest.mark.parametrize("key", [
        "MONARCHY", "playfair example", "J", "zebra", "The Quick Brown Fox",
        "abcdefghijklmnopqrstuvwxyz", "a1b2c3", "jjjj",
    ])
    def test_matrix_contains_alphabet_once(self, key):
        """Every letter except J appears exactly once."""
        cells = [c for row in DigraphCipher(key).matrix_snapshot() for c in row]
        assert len(cells) == 25
        assert sorted(cells) == sorted(DIGRAPH_ALPHABET)
        assert 'J' not in cells

    def test_key_normalized_and_deduplicated(self):
        """Key keeps first occurrences only."""
        assert DigraphCipher("Playfair Example").key == "PLAYFIREXM"
        assert DigraphCipher("jack").key == "IACK"

    def test_matrix_snapshot_is_a_copy(self):
        """Mutating the snapshot must not affect the cipher."""
        cipher = DigraphCipher("MONARCHY")
        snapshot = cipher.matrix_snapshot()
        snapshot[0][0] = '?'
        assert cipher.matrix_snapshot()[0][0] == 'M'

    def test_monarchy_rules_rederived(self):
        """Each pair of INSTRUMENTS follows the row/column/rectangle rules."""
        cipher = DigraphCipher("MONARCHY")
        m = cipher.matrix_snapshot()
        stream = prepare_digraphs(normalize_letters("INSTRUMENTS"))
        assert stream == "INSTRUMENTSX"

        expected = []
        for i in range(0, len(stream), 2):
            (r1, c1), (r2, c2) = cipher.position(stream[i]), cipher.position(stream[i + 1])
            if r1 == r2:
                expected.append(m[r1][(c1 + 1) % 5] + m[r2][(c2 + 1) % 5])
            elif c1 == c2:
                expected.append(m[(r1 + 1) % 5][c1] + m[(r2 + 1) % 5][c2])
            else:
                expected.append(m[r1][c2] + m[r2][c1])

        assert cipher.encrypt("instruments") == "".join(expected)

    def test_same_row_shift(self):
        """Same-row letters move right on encrypt, left on decrypt."""
        cipher = DigraphCipher("MONARCHY")
        # Row 3 is L P Q S T; T wraps to L
        assert cipher.encrypt("ST") == "TL"
        assert cipher.decrypt("TL") == "ST"

    def test_same_column_shift(self):
        """Same-column letters move down on encrypt, up on decrypt."""
        cipher = DigraphCipher("MONARCHY")
        # Column 3 is A B I S X; X wraps to A
        assert cipher.encrypt("SX") == "XA"
        assert cipher.decrypt("XA") == "SX"

    def test_rectangle_swaps_columns(self):
        """Rectangle letters take each other's column."""
        cipher = DigraphCipher("MONARCHY")
        # I at (2, 3), N at (0, 2)
        assert cipher.encrypt("IN") == "GA"
        assert cipher.decrypt("GA") == "IN"

    def test_wikipedia_vector(self):
        """Classic 'playfair example' key."""
        cipher = DigraphCipher("playfair example")
        ciphertext = cipher.encrypt("Hide the gold in the tree stump")
        assert ciphertext == "BMODZBXDNABEKUDMUIXMMOUVIF"
        assert cipher.decrypt(ciphertext) == "HIDETHEGOLDINTHETREXESTUMP"

    def test_transform_accepts_direction_values(self):
        """transform works with the enum or its value."""
        cipher = DigraphCipher("MONARCHY")
        assert cipher.transform("IN", Direction.ENCRYPT) == cipher.transform("IN", "encrypt")

    @pytest.mark.parametrize("key", ["MONARCHY", "KEYWORD", "q", "Cryptify"])
    def test_round_trip_without_fillers(self, key):
        """decrypt(encrypt(text)) == text when no filler is needed."""
        rng = random.Random(key)
        cipher = DigraphCipher(key)
        for pairs in (1, 2, 7, 40):
            text = _pairwise_distinct_text(rng, pairs)
            assert cipher.decrypt(cipher.encrypt(text)) == text

    def test_round_trip_keeps_fillers(self):
        """Fillers survive decryption; the transform is lossy there."""
        cipher = DigraphCipher("MONARCHY")
        assert cipher.decrypt(cipher.encrypt("balloon")) == "BALXLOON"
        assert cipher.decrypt(cipher.encrypt("abc")).endswith(FILLER_LETTER)

    def test_output_even_length(self):
        """Output always contains whole digraphs."""
        cipher = DigraphCipher("MONARCHY")
        assert len(cipher.encrypt("odd")) == 4


class TestModularCipher:
    """Unit tests for the modular (RSA) cipher."""

    def test_key_derivation_17_11(self):
        """Textbook parameters for p=17, q=11."""
        cipher = ModularCipher(17, 11)
        info = cipher.key_info()
        assert info['n'] == 187
        assert info['phi'] == 160
        assert info['e'] == 3
        assert (info['e'] * info['d']) % info['phi'] == 1
        assert info['d'] == 107

    def test_key_derivation_61_53(self):
        """Smallest coprime exponent for phi=3120 is 7."""
        info = ModularCipher(61, 53).key_info()
        assert info['n'] == 3233
        assert info['e'] == 7
        assert info['d'] == 1783

    def test_key_accessors(self):
        """Public and private keys share the modulus."""
        cipher = ModularCipher(17, 11)
        assert cipher.public_key() == {'e': 3, 'n': 187}
        assert cipher.private_key() == {'d': 107, 'n': 187}
        assert cipher.modulus == 187

    def test_key_info_is_a_copy(self):
        """Mutating returned dicts must not affect the cipher."""
        cipher = ModularCipher(17, 11)
        cipher.key_info()['e'] = 99
        cipher.public_key()['n'] = 1
        assert cipher.public_key() == {'e': 3, 'n': 187}

    def test_find_public_exponent(self):
        """Smallest e coprime with phi."""
        assert find_public_exponent(160) == 3
        assert find_public_exponent(4) == 3

    def test_encrypt_known_value(self):
        """'A' (65) encrypts to 65^3 mod 187 = 109."""
        assert ModularCipher(17, 11).encrypt("A") == [109]

    def test_encrypt_length_preserving(self):
        """One value per character."""
        cipher = ModularCipher(17, 11)
        text = "Hello, World!"
        values = cipher.encrypt(text)
        assert len(values) == len(text)
        assert all(0 <= v < 187 for v in values)

    @pytest.mark.parametrize("p, q", [(3, 5), (5, 7), (17, 11), (61, 53), (101, 103)])
    def test_round_trip_all_code_points(self, p, q):
        """Every code point below n survives a round trip."""
        cipher = ModularCipher(p, q)
        text = "".join(chr(i) for i in range(min(p * q, 512)))
        assert cipher.decrypt(cipher.encrypt(text)) == text

    def test_round_trip_unicode(self):
        """Non-ASCII characters work once n is large enough."""
        cipher = ModularCipher(61, 53)
        text = "héllo wörld"
        assert cipher.decrypt(cipher.encrypt(text)) == text

    def test_decrypt_accepts_tuple(self):
        """Any list or tuple of integers decrypts."""
        cipher = ModularCipher(17, 11)
        assert cipher.decrypt(tuple(cipher.encrypt("ok"))) == "ok"

    def test_decrypt_reduces_large_values(self):
        """Values >= n are reduced mod n before decryption."""
        cipher = ModularCipher(17, 11)
        c = cipher.encrypt("A")[0]
        assert cipher.decrypt([c + 187]) == "A"


class TestCipherValueCodec:
    """Unit tests for the JSON codec and prime parsing."""

    def test_encode_compact(self):
        """Values render as a compact JSON array."""
        assert encode_cipher_values([1, 22, 333]) == "[1,22,333]"

    def test_decode(self):
        """JSON arrays of non-negative integers decode."""
        assert decode_cipher_values("[1, 22, 333]") == [1, 22, 333]
        assert decode_cipher_values("  [0]\n") == [0]

    def test_codec_with_cipher(self):
        """Encoded output feeds back into decryption."""
        cipher = ModularCipher(61, 53)
        payload = encode_cipher_values(cipher.encrypt("Cryptify"))
        assert cipher.decrypt(decode_cipher_values(payload)) == "Cryptify"

    def test_parse_prime(self):
        """Ints pass through, canonical decimal strings are parsed."""
        assert parse_prime(17) == 17
        assert parse_prime(" 11 ") == 11
        assert parse_prime("0") == 0
        assert parse_prime("-5") == -5
