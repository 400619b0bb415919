"""
Footer content and file uploads.
"""
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from apps.content.models import FooterContent
from tests.factories import CoAdminFactory, FooterContentFactory


@pytest.mark.django_db
class TestFooterContent:

    def test_public_list_filters_and_orders(self, api_client):
        FooterContentFactory(section='help', order=2, title='Returns')
        FooterContentFactory(section='help', order=1, title='Shipping')
        FooterContentFactory(section='help', order=0, title='Hidden', is_active=False)
        FooterContentFactory(section='about', order=0)

        response = api_client.get('/api/footer-content?section=help&isActive=true')

        assert response.status_code == 200
        assert [item['title'] for item in response.data] == ['Shipping', 'Returns']

    def test_missing_content_is_404(self, api_client):
        response = api_client.get('/api/footer-content/424242')
        assert response.status_code == 404
        assert response.data == {'error': 'Footer content not found'}

    def test_create_requires_fields(self, admin_client):
        response = admin_client.post('/api/admin/footer-content', {'section': 'about'}, format='json')
        assert response.status_code == 400

        response = admin_client.post('/api/admin/footer-content', {
            'section': 'about', 'title': 'Who we are', 'content': 'Since 1998.',
        }, format='json')
        assert response.status_code == 201
        assert response.data['is_active'] is True
        assert response.data['order'] == 0

    def test_update_keeps_blank_fields(self, admin_client):
        block = FooterContentFactory(title='Original')
        response = admin_client.put(f'/api/admin/footer-content/{block.pk}', {
            'title': '', 'content': 'New body',
        }, format='json')
        assert response.data['title'] == 'Original'
        assert response.data['content'] == 'New body'

    @pytest.mark.parametrize('order', [-1, 'first', 1.5, None, True])
    def test_order_must_be_non_negative_integer(self, admin_client, order):
        block = FooterContentFactory(order=3)
        response = admin_client.put(
            f'/api/admin/footer-content/{block.pk}/order', {'order': order}, format='json'
        )
        assert response.status_code == 400
        assert response.data['error'] == 'Order must be a non-negative number'
        block.refresh_from_db()
        assert block.order == 3

    def test_set_order_and_toggle(self, admin_client):
        block = FooterContentFactory(order=3)
        response = admin_client.put(f'/api/admin/footer-content/{block.pk}/order', {'order': 0}, format='json')
        assert response.data['order'] == 0

        response = admin_client.put(f'/api/admin/footer-content/{block.pk}/toggle')
        assert response.data['is_active'] is False

    def test_delete(self, admin_client):
        block = FooterContentFactory()
        assert admin_client.delete(f'/api/admin/footer-content/{block.pk}').status_code == 204
        assert not FooterContent.objects.filter(pk=block.pk).exists()

    def test_co_admin_without_footer_permission(self, api_client):
        api_client.force_authenticate(user=CoAdminFactory(permissions=['canManageOrders']))
        response = api_client.post('/api/admin/footer-content', {
            'section': 'about', 'title': 't', 'content': 'c',
        }, format='json')
        assert response.status_code == 403


@pytest.mark.django_db
class TestUpload:

    @pytest.fixture(autouse=True)
    def media_root(self, settings, tmp_path):
        settings.MEDIA_ROOT = str(tmp_path)
        return tmp_path

    def test_upload_returns_url(self, buyer_client):
        upload = SimpleUploadedFile('photo one.jpg', b'\xff\xd8\xff' + b'0' * 64, content_type='image/jpeg')

        response = buyer_client.post('/api/upload', {'file': upload}, format='multipart')

        assert response.status_code == 201
        assert response.data['key'].startswith('uploads/')
        assert response.data['key'].endswith('photo_one.jpg')
        assert response.data['url'].startswith('/media/uploads/')

    def test_missing_file(self, buyer_client):
        response = buyer_client.post('/api/upload', {}, format='multipart')
        assert response.status_code == 400
        assert response.data['error'] == 'No file uploaded'

    def test_oversized_file(self, buyer_client, settings):
        settings.MAX_UPLOAD_SIZE = 10
        upload = SimpleUploadedFile('big.bin', b'x' * 11)
        response = buyer_client.post('/api/upload', {'file': upload}, format='multipart')
        assert response.status_code == 400
        assert response.data['details']['maxSize'] == 10

    def test_requires_authentication(self, api_client):
        upload = SimpleUploadedFile('a.txt', b'a')
        assert api_client.post('/api/upload', {'file': upload}, format='multipart').status_code == 401
