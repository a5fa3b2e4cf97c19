#!/usr/bin/env python3

# Copyright (C) 2023-2024 The frostlib developers
#
# This file is part of frostlib. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of frostlib including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve classes and scalar multiplication functions.

Points are affine (x, y) int tuples at the public interface,
Jacobian (X, Y, Z) int tuples internally.
Curve parameters are checked according to SEC 1 v.2 3.1.1.2.1.

* SEC 2 v.2 curves: http://www.secg.org/sec2-v2.pdf
"""

import heapq
from math import ceil, sqrt
from typing import Dict, List, Optional, Sequence, Tuple

from frostlib.alias import INF, INFJ, Integer, JacPoint, Point
from frostlib.exceptions import FROSTlibValueError
from frostlib.number_theory import mod_inv, mod_sqrt
from frostlib.utils import hex_string, int_from_integer, int_repr


def jac_from_aff(Q: Point) -> JacPoint:
    """Return the Jacobian representation of the affine point.

    The input point is assumed to be on curve.
    """
    return Q[0], Q[1], 1 if Q[1] else 0


class CurveGroup:
    """Finite group of the points of an elliptic curve over Fp.

    The elliptic curve is the set of points (x, y)
    that are solutions to a Weierstrass equation y^2 = x^3 + a*x + b,
    with x, y, a, and b in Fp (p being a prime),
    together with a point at infinity INF.
    """

    def __init__(self, p: Integer, a: Integer, b: Integer) -> None:

        p = int_from_integer(p)
        a = int_from_integer(a)
        b = int_from_integer(b)

        # 1) check that p is a prime
        # Fermat test will do as _probabilistic_ primality test...
        if p < 2 or p % 2 == 0 or pow(2, p - 1, p) != 1:
            raise FROSTlibValueError(f"p is not prime: {int_repr(p)}")

        self.p = p
        self.p_size = ceil(p.bit_length() / 8)

        # 2. check that a and b are integers in the interval [0, p−1]
        if not 0 <= a < p:
            raise FROSTlibValueError(f"a not in 0..p-1: {int_repr(a)}")
        if not 0 <= b < p:
            raise FROSTlibValueError(f"b not in 0..p-1: {int_repr(b)}")

        # 3. Check that 4*a^3 + 27*b^2 ≠ 0 (mod p)
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise FROSTlibValueError("zero discriminant")
        self._a = a
        self._b = b

    def __repr__(self) -> str:
        result = f"{self.__class__.__name__}({int_repr(self.p)}"
        result += f", {int_repr(self._a)}, {int_repr(self._b)})"
        return result

    def aff_from_jac(self, Q: JacPoint) -> Point:
        # point is assumed to be on curve
        if Q[2] == 0:  # Infinity point in Jacobian coordinates
            return INF

        Z2 = Q[2] * Q[2]
        x = Q[0] * mod_inv(Z2, self.p)
        y = Q[1] * mod_inv(Z2 * Q[2], self.p)
        return x % self.p, y % self.p

    def add(self, Q1: Point, Q2: Point) -> Point:
        """Return the sum of two points.

        The input points must be on the curve.
        """
        self.require_on_curve(Q1)
        self.require_on_curve(Q2)
        # affine addition costs a single mod_inv
        return self.add_aff(Q1, Q2)

    def add_jac(self, Q: JacPoint, R: JacPoint) -> JacPoint:
        # points are assumed to be on curve
        if Q[2] == 0:
            return R
        if R[2] == 0:
            return Q

        RZ2 = R[2] * R[2]
        QZ2 = Q[2] * Q[2]
        M = Q[0] * RZ2 % self.p
        N = R[0] * QZ2 % self.p
        T = Q[1] * RZ2 * R[2] % self.p
        U = R[1] * QZ2 * Q[2] % self.p

        if M == N:  # same affine x
            return self.double_jac(Q) if T == U else INFJ

        W = U - T
        V = N - M
        V2 = V * V
        V3 = V2 * V
        MV2 = M * V2

        X = (W * W - V3 - 2 * MV2) % self.p
        Y = (W * (MV2 - X) - T * V3) % self.p
        Z = (V * Q[2] * R[2]) % self.p
        return X, Y, Z

    def double_jac(self, Q: JacPoint) -> JacPoint:
        # point is assumed to be on curve
        QZ2 = Q[2] * Q[2]
        QY2 = Q[1] * Q[1]
        W = 3 * Q[0] * Q[0] + self._a * QZ2 * QZ2
        V = 4 * Q[0] * QY2
        X = W * W - 2 * V
        Y = W * (V - X) - 8 * QY2 * QY2
        Z = 2 * Q[1] * Q[2]
        return X % self.p, Y % self.p, Z % self.p

    def add_aff(self, Q: Point, R: Point) -> Point:
        # points are assumed to be on curve
        if R[1] == 0:  # Infinity point in affine coordinates
            return Q
        if Q[1] == 0:
            return R

        if R[0] == Q[0]:
            if R[1] == Q[1]:
                return self.double_aff(R)
            return INF  # opposite points

        lam = (R[1] - Q[1]) * mod_inv(R[0] - Q[0], self.p)
        x = lam * lam - Q[0] - R[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def double_aff(self, Q: Point) -> Point:
        # point is assumed to be on curve
        if Q[1] == 0:
            return INF

        lam = (3 * Q[0] * Q[0] + self._a) * mod_inv(2 * Q[1], self.p)
        x = lam * lam - Q[0] - Q[0]
        y = lam * (Q[0] - x) - Q[1]
        return x % self.p, y % self.p

    def _y2(self, x: int) -> int:
        # no check that y^2 has a square root: keep it private
        return ((x * x + self._a) * x + self._b) % self.p

    def y(self, x: int) -> int:
        """Return the y coordinate from x, as in (x, y)."""
        if not 0 <= x < self.p:
            raise FROSTlibValueError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        try:
            return mod_sqrt(self._y2(x), self.p)
        except FROSTlibValueError as e:
            raise FROSTlibValueError(f"invalid x-coordinate: {int_repr(x)}") from e

    def y_even(self, x: int) -> int:
        "Return the even affine y-coordinate associated to x."
        root = self.y(x)
        return self.p - root if root % 2 else root

    def require_on_curve(self, Q: Point) -> None:
        "Raise an Error if the input Point is not on the curve."
        if not self.is_on_curve(Q):
            raise FROSTlibValueError("point not on curve")

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if the point is on the curve."
        if len(Q) != 2:
            raise FROSTlibValueError("point must be a tuple[int, int]")
        if Q[1] == 0:  # Infinity point in affine coordinates
            return True
        if not 0 < Q[1] < self.p:
            raise FROSTlibValueError(f"y-coordinate not in 1..p-1: {int_repr(Q[1])}")
        return self._y2(Q[0]) == (Q[1] * Q[1] % self.p)


def mult_jac(m: int, Q: JacPoint, ec: CurveGroup) -> JacPoint:
    """Scalar multiplication of a curve point in Jacobian coordinates.

    This implementation uses
    'double & add' algorithm,
    'right-to-left' binary decomposition of the m coefficient,
    Jacobian coordinates.

    The input point is assumed to be on curve and
    the m coefficient is assumed to have been reduced mod n.
    """

    if m < 0:
        raise FROSTlibValueError(f"negative m: {hex(m)}")

    # R[0] is the running result, R[1] is an ancillary variable
    R = [INFJ, Q]
    R[not m & 1] = Q
    m >>= 1
    while m > 0:
        Q = ec.double_jac(Q)
        # always perform the addition, use it only if the bit is 1
        R[not m & 1] = ec.add_jac(R[0], Q)
        m >>= 1
    return R[0]


def _double_mult(
    u: int, HJ: JacPoint, v: int, QJ: JacPoint, ec: CurveGroup
) -> JacPoint:
    """Double scalar multiplication (u*H + v*Q).

    Shamir-Strauss algorithm: a single 'double & add' loop
    over the 'left-to-right' binary digits of both u and v,
    with H+Q precomputed.
    """

    if u < 0:
        raise FROSTlibValueError(f"negative first coefficient: {hex(u)}")
    if v < 0:
        raise FROSTlibValueError(f"negative second coefficient: {hex(v)}")

    T = [INFJ, HJ, QJ, ec.add_jac(HJ, QJ)]
    ui = bin(u)[2:]
    vi = bin(v)[2:].zfill(len(ui))
    ui = ui.zfill(len(vi))
    digits = [int(j) + 2 * int(k) for j, k in zip(ui, vi)]
    R = T[digits[0]]
    for i in digits[1:]:
        R = ec.add_jac(ec.double_jac(R), T[i])
    return R


def _multi_mult(
    scalars: Sequence[int], jac_points: Sequence[JacPoint], ec: CurveGroup
) -> JacPoint:
    """Return the multi scalar multiplication u1*Q1 + ... + un*Qn.

    Use Bos-Coster's algorithm for efficient computation.
    """
    # source: https://cr.yp.to/badbatch/boscoster2.py

    if len(scalars) != len(jac_points):
        err_msg = "mismatch between number of scalars and points: "
        err_msg += f"{len(scalars)} vs {len(jac_points)}"
        raise FROSTlibValueError(err_msg)

    heap: List[Tuple[int, int, JacPoint]] = []
    for n, PJ in zip(scalars, jac_points):
        if n == 0:  # mandatory check to avoid infinite loop
            continue
        if n < 0:
            raise FROSTlibValueError(f"negative coefficient: {hex(n)}")
        # the heap entry position breaks ties without comparing points
        heap.append((-n, len(heap), PJ))

    if not heap:
        return INFJ

    heapq.heapify(heap)
    counter = len(heap)
    while len(heap) > 1:
        n_1, _, p_1 = heapq.heappop(heap)
        n_2, _, p_2 = heapq.heappop(heap)
        n_1, n_2 = -n_1, -n_2
        # n_1*P_1 + n_2*P_2 = (n_1 % n_2)*P_1 + n_2*(q*P_1 + P_2)
        q, n_1 = divmod(n_1, n_2)
        q_p_1 = p_1 if q == 1 else mult_jac(q, p_1, ec)
        p_2 = ec.add_jac(q_p_1, p_2)
        if n_1 > 0:
            heapq.heappush(heap, (-n_1, counter, p_1))
            counter += 1
        heapq.heappush(heap, (-n_2, counter, p_2))
        counter += 1
    n_1, _, p_1 = heap[0]
    return mult_jac(-n_1, p_1, ec)


class Curve(CurveGroup):
    "Prime order subgroup of the points of an elliptic curve over Fp."

    def __init__(
        self,
        p: Integer,
        a: Integer,
        b: Integer,
        G: Point,
        n: Integer,
        h: int,
        weakness_check: bool = True,
        name: Optional[str] = None,
    ) -> None:

        super().__init__(p, a, b)

        # 4. Check that yG^2 = xG^3 + a*xG + b (mod p)
        if len(G) != 2:
            raise FROSTlibValueError("generator must a be a sequence[int, int]")
        self.G = int_from_integer(G[0]), int_from_integer(G[1])
        if self.G[1] == 0:
            raise FROSTlibValueError("INF point cannot be a generator")
        if not self.is_on_curve(self.G):
            raise FROSTlibValueError("generator is not on the curve")
        self.GJ = self.G[0], self.G[1], 1

        n = int_from_integer(n)
        # 5. Check that n is prime.
        if n < 2 or n % 2 == 0 or pow(2, n - 1, n) != 1:
            raise FROSTlibValueError(f"n is not prime: {int_repr(n)}")
        delta = int(2 * sqrt(self.p))
        # also check n with Hasse Theorem
        if h < 2 and not self.p + 1 - delta <= n <= self.p + 1 + delta:
            raise FROSTlibValueError(f"n not in p+1-delta..p+1+delta: {int_repr(n)}")
        self.n = n
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8

        # 7. Check that nG = INF
        if mult_jac(n, self.GJ, self)[2] != 0:
            raise FROSTlibValueError(f"n is not the group order: {int_repr(n)}")

        # 6. Check cofactor
        exp_h = int(1 / n + delta / n + self.p / n)
        if h != exp_h:
            raise FROSTlibValueError(f"invalid h: {h}, expected {exp_h}")
        self.h = h

        # 8. Check that n ≠ p
        if n == self.p:
            raise UserWarning(f"n=p weak curve: {hex_string(n)}")

        if weakness_check:
            # 8. Check that p^i % n ≠ 1 for all 1≤i<100
            for i in range(1, 100):
                if pow(self.p, i, n) == 1:
                    raise UserWarning("weak curve")

        self.name = name or repr(self)

    def __repr__(self) -> str:
        result = super().__repr__()[:-1]
        result += f", ({int_repr(self.G[0])}, {int_repr(self.G[1])})"
        result += f", {int_repr(self.n)}, {self.h})"
        return result


# SEC 2 v.2 curves, http://www.secg.org/sec2-v2.pdf
secp256k1 = Curve(
    2**256 - 2**32 - 977,
    0,
    7,
    (
        0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
        0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    ),
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    1,
    name="secp256k1",
)

# NIST P-256, a.k.a. SEC 2 secp256r1
secp256r1 = Curve(
    2**256 - 2**224 + 2**192 + 2**96 - 1,
    0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    (
        0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
        0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
    ),
    0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    1,
    name="secp256r1",
)

CURVES: Dict[str, Curve] = {
    "secp256k1": secp256k1,
    "secp256r1": secp256r1,
    # NIST name
    "P-256": secp256r1,
}


def mult(m: Integer, Q: Optional[Point] = None, ec: Curve = secp256k1) -> Point:
    """Elliptic curve scalar multiplication.

    Q defaults to the curve generator;
    m is reduced mod n before multiplication.
    """
    if Q is None:
        QJ = ec.GJ
    else:
        ec.require_on_curve(Q)
        QJ = jac_from_aff(Q)

    m = int_from_integer(m) % ec.n
    R = mult_jac(m, QJ, ec)
    return ec.aff_from_jac(R)


def double_mult(
    u: Integer, H: Point, v: Integer, Q: Point, ec: Curve = secp256k1
) -> Point:
    """Double scalar multiplication (u*H + v*Q)."""

    ec.require_on_curve(H)
    HJ = jac_from_aff(H)

    ec.require_on_curve(Q)
    QJ = jac_from_aff(Q)

    u = int_from_integer(u) % ec.n
    v = int_from_integer(v) % ec.n
    R = _double_mult(u, HJ, v, QJ, ec)
    return ec.aff_from_jac(R)


def multi_mult(
    scalars: Sequence[Integer], points: Sequence[Point], ec: Curve = secp256k1
) -> Point:
    """Return the multi scalar multiplication u1*Q1 + ... + un*Qn."""

    if len(scalars) != len(points):
        err_msg = "mismatch between number of scalars and points: "
        err_msg += f"{len(scalars)} vs {len(points)}"
        raise FROSTlibValueError(err_msg)

    jac_points: List[JacPoint] = []
    for P in points:
        ec.require_on_curve(P)
        jac_points.append(jac_from_aff(P))

    ints = [int_from_integer(n) % ec.n for n in scalars]
    R = _multi_mult(ints, jac_points, ec)
    return ec.aff_from_jac(R)
