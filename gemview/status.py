# gemview/status.py
from enum import IntEnum
from typing import NamedTuple


class GmStatusCode(IntEnum):
    # client-side codes are negative
    CLIENT_SIDE = -100
    INVALID_REDIRECT = -99
    SCHEME_CHANGE_REDIRECT = -98
    TOO_MANY_REDIRECTS = -97
    TLS_FAILURE = -96
    UNSUPPORTED_MIME_TYPE = -95
    FAILED_TO_OPEN_FILE = -94
    UNKNOWN_STATUS_CODE = -93
    INVALID_HEADER = -92
    INVALID_LOCAL_RESOURCE = -91
    UNSUPPORTED_PROTOCOL = -90

    NONE = 0
    INPUT = 10
    SENSITIVE_INPUT = 11
    SUCCESS = 20
    REDIRECT_TEMPORARY = 30
    REDIRECT_PERMANENT = 31
    TEMPORARY_FAILURE = 40
    SERVER_UNAVAILABLE = 41
    CGI_ERROR = 42
    PROXY_ERROR = 43
    SLOW_DOWN = 44
    PERMANENT_FAILURE = 50
    NOT_FOUND = 51
    GONE = 52
    PROXY_REQUEST_REFUSED = 53
    BAD_REQUEST = 59
    CLIENT_CERTIFICATE_REQUIRED = 60
    CERTIFICATE_NOT_AUTHORIZED = 61
    CERTIFICATE_NOT_VALID = 62


class GmError(NamedTuple):
    icon: int   # Unicode code point, 0 for none
    title: str
    info: str


NO_ERROR = GmError(0, "", "")

# The first entry is the fallback for codes missing from the table.
ERRORS = {
    GmStatusCode.UNKNOWN_STATUS_CODE: GmError(
        0x1F4AB,  # dizzy
        "Unknown Status Code",
        "The server responded with a status code that is not in the Gemini specification. "
        "Maybe the server is from the future? Or just malfunctioning.",
    ),
    GmStatusCode.FAILED_TO_OPEN_FILE: GmError(
        0x1F4C1,  # file folder
        "Failed to Open File",
        "The requested file does not exist or is inaccessible. Please check the file path.",
    ),
    GmStatusCode.INVALID_LOCAL_RESOURCE: GmError(
        0,
        "Invalid Resource",
        "The requested resource does not exist.",
    ),
    GmStatusCode.UNSUPPORTED_MIME_TYPE: GmError(
        0x1F47D,  # alien
        "Unsupported Content Type",
        "The received content cannot be viewed with this application.",
    ),
    GmStatusCode.UNSUPPORTED_PROTOCOL: GmError(
        0x1F61E,  # disappointed
        "Unsupported Protocol",
        "The requested protocol is not supported by this application.",
    ),
    GmStatusCode.INVALID_HEADER: GmError(
        0x1F4A9,
        "Invalid Header",
        "The received header did not conform to the Gemini specification. "
        "Perhaps the server is malfunctioning or you tried to contact a non-Gemini server.",
    ),
    GmStatusCode.INVALID_REDIRECT: GmError(
        0x27A0,  # dashed arrow
        "Invalid Redirect",
        "The server responded with a redirect but did not provide a valid destination URL. "
        "Perhaps the server is malfunctioning.",
    ),
    GmStatusCode.SCHEME_CHANGE_REDIRECT: GmError(
        0x27A0,
        "Scheme-Changing Redirect",
        "The server attempted to redirect us to a URL whose scheme is different than the "
        "originating URL's scheme. Here is the link so you can open it manually if appropriate.",
    ),
    GmStatusCode.TOO_MANY_REDIRECTS: GmError(
        0x27A0,
        "Too Many Redirects",
        "You may be stuck in a redirection loop. The next redirected URL is below if you "
        "want to continue manually.",
    ),
    GmStatusCode.TLS_FAILURE: GmError(
        0x1F5A7,  # networked computers
        "Network/TLS Failure",
        "Failed to communicate with the host. Here is the error message:",
    ),
    GmStatusCode.TEMPORARY_FAILURE: GmError(
        0x1F50C,  # electric plug
        "Temporary Failure",
        "The request has failed, but may succeed if you try again in the future.",
    ),
    GmStatusCode.SERVER_UNAVAILABLE: GmError(
        0x1F525,  # fire
        "Server Unavailable",
        "The server is unavailable due to overload or maintenance. Check back later.",
    ),
    GmStatusCode.CGI_ERROR: GmError(
        0x1F4A5,  # collision
        "CGI Error",
        "Failure during dynamic content generation on the server. This may be due "
        "to buggy serverside software.",
    ),
    GmStatusCode.PROXY_ERROR: GmError(
        0x1F310,  # globe
        "Proxy Error",
        "A proxy request failed because the server was unable to successfully "
        "complete a transaction with the remote host. Perhaps there are difficulties "
        "with network connectivity.",
    ),
    GmStatusCode.SLOW_DOWN: GmError(
        0x1F40C,  # snail
        "Slow Down",
        "The server is rate limiting requests. Please wait...",
    ),
    GmStatusCode.PERMANENT_FAILURE: GmError(
        0x1F6AB,  # no entry
        "Permanent Failure",
        "Your request has failed and will fail in the future as well if repeated.",
    ),
    GmStatusCode.NOT_FOUND: GmError(
        0x1F50D,  # magnifying glass
        "Not Found",
        "The requested resource could not be found at this time.",
    ),
    GmStatusCode.GONE: GmError(
        0x1F47B,  # ghost
        "Gone",
        "The resource requested is no longer available and will not be available again.",
    ),
    GmStatusCode.PROXY_REQUEST_REFUSED: GmError(
        0x1F6C2,  # passport control
        "Proxy Request Refused",
        "The request was for a resource at a domain not served by the server and the "
        "server does not accept proxy requests.",
    ),
    GmStatusCode.BAD_REQUEST: GmError(
        0x1F44E,  # thumbs down
        "Bad Request",
        "The server was unable to parse your request, presumably due to the "
        "request being malformed.",
    ),
    GmStatusCode.CLIENT_CERTIFICATE_REQUIRED: GmError(
        0x1F511,  # key
        "Certificate Required",
        "Access to the requested resource requires identification via a client certificate.",
    ),
    GmStatusCode.CERTIFICATE_NOT_AUTHORIZED: GmError(
        0x1F512,  # lock
        "Certificate Not Authorized",
        "The provided client certificate is valid but is not authorized for accessing "
        "the requested resource.",
    ),
    GmStatusCode.CERTIFICATE_NOT_VALID: GmError(
        0x1F6A8,  # revolving light
        "Invalid Certificate",
        "The provided client certificate is expired or invalid.",
    ),
}


def is_defined(code: int) -> bool:
    return code in ERRORS


def is_success(code: int) -> bool:
    return 20 <= code < 30


def is_failure(code: int) -> bool:
    return code < 0 or code >= 40


def error_info(code: int) -> GmError:
    """Icon, title and explanation for a status code; never fails."""
    if code == GmStatusCode.NONE:
        return NO_ERROR
    return ERRORS.get(code, ERRORS[GmStatusCode.UNKNOWN_STATUS_CODE])
