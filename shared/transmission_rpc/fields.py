"""Torrent field catalog and status labels.

Both align with the ``torrent-get`` section of the Transmission RPC docs.
"""

from __future__ import annotations

# Python-side name → wire name
TorrentField: dict[str, str] = {
    "id": "id",
    "addedDate": "addedDate",
    "creator": "creator",
    "doneDate": "doneDate",
    "comment": "comment",
    "name": "name",
    "totalSize": "totalSize",
    "error": "error",
    "errorString": "errorString",
    "eta": "eta",
    "etaIdle": "etaIdle",
    "isFinished": "isFinished",
    "isStalled": "isStalled",
    "isPrivate": "isPrivate",
    "files": "files",
    "fileStats": "fileStats",
    "hashString": "hashString",
    "leftUntilDone": "leftUntilDone",
    "metadataPercentComplete": "metadataPercentComplete",
    "peers": "peers",
    "peersFrom": "peersFrom",
    "peersConnected": "peersConnected",
    "peersGettingFromUs": "peersGettingFromUs",
    "peersSendingToUs": "peersSendingToUs",
    "percentDone": "percentDone",
    "queuePosition": "queuePosition",
    "rateDownload": "rateDownload",
    "rateUpload": "rateUpload",
    "secondsDownloading": "secondsDownloading",
    "recheckProgress": "recheckProgress",
    "seedRatioMode": "seedRatioMode",
    "seedRatioLimit": "seedRatioLimit",
    "seedIdleLimit": "seedIdleLimit",
    "sizeWhenDone": "sizeWhenDone",
    "status": "status",
    "trackers": "trackers",
    "downloadDir": "downloadDir",
    "downloadLimit": "downloadLimit",
    "downloadLimited": "downloadLimited",
    "uploadedEver": "uploadedEver",
    "downloadedEver": "downloadedEver",
    "corruptEver": "corruptEver",
    "uploadRatio": "uploadRatio",
    "webseedsSendingToUs": "webseedsSendingToUs",
    "haveUnchecked": "haveUnchecked",
    "haveValid": "haveValid",
    "honorsSessionLimits": "honorsSessionLimits",
    "manualAnnounceTime": "manualAnnounceTime",
    "activityDate": "activityDate",
    "desiredAvailable": "desiredAvailable",
    "labels": "labels",
    "magnetLink": "magnetLink",
    "maxConnectedPeers": "maxConnectedPeers",
    "peerLimit": "peer-limit",
    "priorities": "priorities",
    "wanted": "wanted",
    "webseeds": "webseeds",
}

# Every wire field, handy as the default ``fields`` argument of torrent-get
ALL_TORRENT_FIELDS: tuple[str, ...] = tuple(TorrentField.values())

TORRENT_STATUS: dict[int, str] = {
    0: "STOPPED",
    1: "QUEUED_CHECK",
    2: "CHECKING",
    3: "QUEUED_DOWNLOAD",
    4: "DOWNLOADING",
    5: "QUEUED_SEED",
    6: "SEEDING",
}


def get_status(code: int | None) -> str | None:
    """Return the label for a numeric torrent status, or None if unknown."""
    if code is None:
        return None
    return TORRENT_STATUS.get(code)
