"""EXIF metadata extraction for uploaded photos"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, Optional

from PIL import Image, UnidentifiedImageError
from PIL.ExifTags import GPSTAGS, TAGS

logger = logging.getLogger(__name__)

EXIF_IFD = 0x8769
GPS_IFD = 0x8825
EXIF_TIME_FORMAT = "%Y:%m:%d %H:%M:%S"


class ExifService:
    """Service for extracting capture time and GPS position from photos"""

    @staticmethod
    def _convert_to_degrees(value: tuple) -> Optional[float]:
        """
        Convert GPS coordinates to degrees.

        Args:
            value: Tuple of (degrees, minutes, seconds)

        Returns:
            Decimal degrees
        """
        try:
            d, m, s = value
            return float(d) + (float(m) / 60.0) + (float(s) / 3600.0)
        except (ValueError, TypeError, ZeroDivisionError):
            return None

    @staticmethod
    def _get_gps_coordinates(gps_info: Dict) -> Optional[Dict[str, float]]:
        """
        Extract GPS coordinates from GPS info.

        Args:
            gps_info: GPS info dictionary keyed by tag name

        Returns:
            Dictionary with latitude and longitude or None
        """
        gps_latitude = gps_info.get("GPSLatitude")
        gps_latitude_ref = gps_info.get("GPSLatitudeRef")
        gps_longitude = gps_info.get("GPSLongitude")
        gps_longitude_ref = gps_info.get("GPSLongitudeRef")

        if not all([gps_latitude, gps_latitude_ref, gps_longitude, gps_longitude_ref]):
            return None

        lat = ExifService._convert_to_degrees(gps_latitude)
        lon = ExifService._convert_to_degrees(gps_longitude)

        if lat is None or lon is None:
            return None

        # Adjust for hemisphere
        if gps_latitude_ref == "S":
            lat = -lat
        if gps_longitude_ref == "W":
            lon = -lon

        return {
            "latitude": lat,
            "longitude": lon,
        }

    @staticmethod
    def _parse_timestamp(value: Any) -> Optional[datetime]:
        if isinstance(value, bytes):
            value = value.decode("ascii", errors="ignore")
        try:
            return datetime.strptime(str(value).strip("\x00 "), EXIF_TIME_FORMAT)
        except ValueError:
            return None

    @staticmethod
    def extract_photo_metadata(image_bytes: bytes) -> Dict[str, Any]:
        """
        Read capture time and GPS position from image bytes.

        Args:
            image_bytes: Image file bytes

        Returns:
            Dictionary with any of ``taken_at``, ``latitude``, ``longitude``.
            Empty when the image carries no usable EXIF.
        """
        metadata: Dict[str, Any] = {}

        try:
            image = Image.open(BytesIO(image_bytes))
            exif_raw = image.getexif()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.warning(f"Failed to read EXIF data: {e}")
            return metadata

        if not exif_raw:
            logger.info("No EXIF data found in image")
            return metadata

        tags = {TAGS.get(tag_id, tag_id): value for tag_id, value in exif_raw.items()}
        tags.update(
            {TAGS.get(tag_id, tag_id): value for tag_id, value in exif_raw.get_ifd(EXIF_IFD).items()}
        )

        taken_at = ExifService._parse_timestamp(
            tags.get("DateTimeOriginal") or tags.get("DateTime") or ""
        )
        if taken_at:
            metadata["taken_at"] = taken_at

        gps_info_raw = exif_raw.get_ifd(GPS_IFD)
        if gps_info_raw:
            gps_info = {GPSTAGS.get(tag_id, tag_id): value for tag_id, value in gps_info_raw.items()}
            gps_coordinates = ExifService._get_gps_coordinates(gps_info)
            if gps_coordinates:
                metadata.update(gps_coordinates)

        logger.info(f"Extracted photo metadata: {sorted(metadata)}")
        return metadata
