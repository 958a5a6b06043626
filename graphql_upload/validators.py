"""
Validators for uploaded files
"""


class UploadValidator:
    """
    Validates uploaded files against the upload policy
    """

    @staticmethod
    def validate_file_properties(file):
        """
        Validate that the client sent a usable file part

        Args:
            file: Uploaded file

        Returns:
            tuple: (is_valid, error_message)
        """
        if not file.name:
            return False, "Invalid file properties: missing file name"

        if not file.size:
            return False, f"Invalid file properties: '{file.name}' is empty"

        if not file.content_type:
            return False, f"Invalid file properties: '{file.name}' has no content type"

        return True, ""

    @staticmethod
    def validate_file_size(file, policy):
        """
        Validate the declared file size

        Args:
            file: Uploaded file
            policy: UploadPolicy instance

        Returns:
            tuple: (is_valid, error_message)
        """
        if file.size > policy.max_file_size:
            return False, f"File size is too large. Maximum allowed size is {policy.max_file_size_mb}MB."

        return True, ""

    @staticmethod
    def validate_mime_type(mime_type, policy):
        """
        Validate the effective (sniffed) MIME type

        Args:
            mime_type: Effective MIME type of the file
            policy: UploadPolicy instance

        Returns:
            tuple: (is_valid, error_message)
        """
        if mime_type not in policy.allowed_types:
            return False, (
                f"File type {mime_type} is not allowed. "
                f"Allowed types: {policy.describe_allowed_types()}"
            )

        return True, ""
