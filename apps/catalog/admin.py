from django.contrib import admin

from .models import Category, Product, ProductDetail


class ProductDetailInline(admin.TabularInline):
    model = ProductDetail
    extra = 0


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "is_deleted")
    list_filter = ("is_deleted",)
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "category", "price", "is_deleted", "created_at")
    list_filter = ("is_deleted", "category")
    search_fields = ("name",)
    list_select_related = ("category",)
    inlines = [ProductDetailInline]
