"""styleguide: demo page trees and records for TCA form configuration."""

__version__ = "0.1.0"
