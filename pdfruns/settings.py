# When set, unknown operator kinds and malformed operators raise instead of
# being logged and skipped.
STRICT = False
