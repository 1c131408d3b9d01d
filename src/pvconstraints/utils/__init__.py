"""
Contains some useful utility functions to query validated objects and to run coroutines concurrently.
"""
from .query_object import field_value, is_collection, is_object_value, iter_elements, matches_type, present_fields
from .tasks import gather_or_cancel
