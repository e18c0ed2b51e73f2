"""
Great-circle distance as a Spark column expression.
"""

from pyspark.sql import Column
from pyspark.sql import functions as F

# WGS84 equatorial radius
EARTH_RADIUS_M = 6378137.0


def haversine_m(lon1: Column, lat1: Column, lon2: Column, lat2: Column) -> Column:
    """Haversine distance in metres between two points given in degrees."""
    phi1 = F.radians(lat1)
    phi2 = F.radians(lat2)
    d_phi = F.radians(lat2 - lat1)
    d_lambda = F.radians(lon2 - lon1)

    a = F.pow(F.sin(d_phi / 2), 2) + F.cos(phi1) * F.cos(phi2) * F.pow(F.sin(d_lambda / 2), 2)
    # Rounding can push a marginally above 1 for antipodal points
    a = F.least(a, F.lit(1.0))
    return F.lit(2 * EARTH_RADIUS_M) * F.asin(F.sqrt(a))
