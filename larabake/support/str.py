"""
String Helper Functions
Inflection utilities used for template names, themes and titles
"""
import re


class Str:
    """
    String manipulation helper class (Laravel-style)

    Provides the inflections the view layer relies on:
    - snake_case for view and plugin names
    - StudlyCase for theme directories
    - humanized titles for layouts
    """

    @staticmethod
    def snake(value: str, delimiter: str = '_') -> str:
        """
        Convert a string to snake_case

        Example:
            Str.snake('BlogPosts')  # 'blog_posts'
            Str.snake('blogPosts')  # 'blog_posts'
            Str.snake('Blog Posts')  # 'blog_posts'
        """
        if not value:
            return value

        value = value.replace(' ', delimiter)

        # Insert delimiter before uppercase letters
        value = re.sub('(.)([A-Z][a-z]+)', r'\1' + delimiter + r'\2', value)
        value = re.sub('([a-z0-9])([A-Z])', r'\1' + delimiter + r'\2', value)

        value = value.lower()
        value = re.sub(f'{re.escape(delimiter)}+', delimiter, value)

        return value.strip(delimiter)

    @staticmethod
    def underscore(value: str) -> str:
        """
        Underscore a CamelCased name, keeping path separators

        Example:
            Str.underscore('ViewAll')  # 'view_all'
            Str.underscore('Posts/ViewAll')  # 'posts/view_all'
        """
        if not value:
            return value
        return '/'.join(Str.snake(part) for part in value.split('/'))

    @staticmethod
    def studly(value: str) -> str:
        """
        Convert a string to StudlyCase (PascalCase)

        Example:
            Str.studly('dark_blue')  # 'DarkBlue'
            Str.studly('dark-blue')  # 'DarkBlue'
            Str.studly('DarkBlue')  # 'DarkBlue'
        """
        if not value:
            return value

        value = value.replace('_', ' ').replace('-', ' ')

        return ''.join(word[0].upper() + word[1:] for word in value.split())

    @staticmethod
    def camel(value: str) -> str:
        """Convert a string to camelCase"""
        if not value:
            return value

        studly = Str.studly(value)
        return studly[0].lower() + studly[1:] if studly else ''

    @staticmethod
    def humanize(value: str, delimiter: str = '_') -> str:
        """
        Turn an underscored or studly name into a human readable title

        Example:
            Str.humanize('blog_posts')  # 'Blog Posts'
            Str.humanize('BlogPosts')  # 'Blog Posts'
        """
        if not value:
            return ''

        words = Str.snake(value, delimiter).split(delimiter)
        return ' '.join(word[:1].upper() + word[1:] for word in words if word)
