from .hellofixture import FixtureFactory, FixtureProtocol, build_response, format_timestamp
