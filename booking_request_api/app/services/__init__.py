"""
Service layer.

``validation`` turns raw submissions into normalized records;
``booking_request_service`` stores and administers them.
"""
