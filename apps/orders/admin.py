from django.contrib import admin

from .models import Order, OrderDetail


class OrderDetailInline(admin.TabularInline):
    model = OrderDetail
    extra = 0
    raw_id_fields = ("detail",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "order_status", "total_price", "is_deleted", "created_at")
    list_filter = ("order_status", "is_deleted")
    search_fields = ("user__email",)
    list_select_related = ("user",)
    inlines = [OrderDetailInline]
